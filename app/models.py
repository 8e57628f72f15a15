from pydantic import BaseModel
from typing import Optional, Dict, Any, List


class Pagination(BaseModel):
    currentPage: int
    itemsPerPage: int
    totalItems: int
    totalPages: int


class ProductPage(BaseModel):
    data: List[Dict[str, Any]]
    pagination: Pagination


class ProductStats(BaseModel):
    totalProducts: int
    inStockCount: int
    outOfStockCount: int
    categories: Dict[str, int]
    averagePrice: float


class ApiInfo(BaseModel):
    message: str
    endpoints: Dict[str, str]


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Optional[List[str]] = None
    stack: Optional[str] = None
