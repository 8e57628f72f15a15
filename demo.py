#!/usr/bin/env python
import os

from sdk.pystore import StoreAPIError, StoreClient

BASE_URL = os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000")
API_KEY = os.environ.get("API_KEY", "SECRET_API_KEY")


def main():
    c = StoreClient(base_url=BASE_URL, api_key=API_KEY)

    print("=== Testing Product API ===")

    print("\nRoot endpoint:")
    print(c.info())

    print("\nCreating product:")
    print(c.create_product("Test Product", 19.99, "test"))

    print("\nAll products (first):")
    print(c.list_products()["data"][0])

    print("\nSearch results:")
    print(c.search_products("test"))

    print("\nProduct statistics:")
    print(c.stats())

    print("\nAuthentication test (should fail):")
    bad = StoreClient(base_url=BASE_URL, api_key="invalid-key")
    try:
        bad.create_raw({"name": "Should Fail"})
    except StoreAPIError as e:
        print(e.status_code, e.error, e.message)

    print("\nValidation test (should fail):")
    try:
        c.create_raw({"price": -10})
    except StoreAPIError as e:
        print(e.status_code, e.error, e.message, e.details)

    print("=== Tests completed ===")


if __name__ == "__main__":
    main()
