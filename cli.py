# cli.py
import os
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pystore import StoreAPIError, StoreClient

console = Console()
c = StoreClient(
    base_url=os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
    api_key=os.environ.get("API_KEY"),
)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], out: Optional[Console] = None):
    out = out or console
    if not products:
        out.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("Stock", width=8)

    for p in products:
        price = p.get("price", 0)
        price_text = f"${price:.2f}" if isinstance(price, (int, float)) else str(price)
        in_stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            str(p.get("id", "N/A")),
            str(p.get("name", "N/A")),
            price_text,
            str(p.get("category", "N/A")),
            in_stock,
        )
    out.print(table)


def show_pagination(pagination: Dict[str, Any], out: Optional[Console] = None):
    out = out or console
    out.print(
        f"[dim]Page {pagination.get('currentPage')} of {pagination.get('totalPages')} "
        f"({pagination.get('totalItems')} items, {pagination.get('itemsPerPage')} per page)[/dim]"
    )


def show_stats(stats: Dict[str, Any], out: Optional[Console] = None):
    out = out or console
    table = Table(box=box.ROUNDED, header_style="bold yellow", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total products", str(stats.get("totalProducts", 0)))
    table.add_row("In stock", str(stats.get("inStockCount", 0)))
    table.add_row("Out of stock", str(stats.get("outOfStockCount", 0)))
    table.add_row("Average price", f"${stats.get('averagePrice', 0):.2f}")
    for category, count in sorted(stats.get("categories", {}).items()):
        table.add_row(f"  {category}", str(count))
    out.print(Panel.fit(table, title="📊 Statistics", border_style="yellow"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def describe_error(e: StoreAPIError) -> str:
    text = f"{e.error} ({e.status_code}): {e.message}"
    if e.details:
        text += " - " + "; ".join(e.details)
    return text


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the result, or None after reporting the failure in the status panel.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except StoreAPIError as e:
        status_message = f"Error: {describe_error(e)}"
    except Exception as e:
        status_message = f"Error: {e}"
    console.print(show_status(status_message, False))
    return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    page = try_api(c.list_products, limit=100)
    product_cache = page["data"] if page else []


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    names = [p.get("name", "") for p in product_cache]
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([n for n in (names + ids) if n], ignore_case=True)


def get_category_completer():
    if not product_cache:
        refresh_product_cache()
    return WordCompleter(sorted({p.get("category", "") for p in product_cache} - {""}), ignore_case=True)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    auth = "[green]API key set[/green]" if c.api_key else "[yellow]read-only[/yellow]"
    header.add_row(
        "🛍️ Products API",
        f"[bold blue]{c.base_url}[/bold blue] {auth}",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    name = prompt_with_autocomplete("Product name", default=str(current.get("name", "")))
    description = prompt_with_autocomplete("Description", default=str(current.get("description", "")))
    price = ask_float("💰 Price", default=float(current.get("price", 10.0)))
    category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer(),
                                        default=str(current.get("category", "")))
    in_stock = Confirm.ask("In stock?", default=bool(current.get("inStock", True)))
    return {"name": name, "description": description, "price": price,
            "category": category, "inStock": in_stock}


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "✏️ Update product"),
            ("2", "🔍 Search products", "6", "🗑️ Delete product"),
            ("3", "ℹ️ Get product by ID", "7", "📊 Statistics"),
            ("4", "➕ Create product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            category = prompt_with_autocomplete("Category (blank for all)", completer=get_category_completer())
            page = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Items per page", default=10)
            res = try_api(c.list_products, category.strip() or None, page, limit,
                          success_msg="Products loaded successfully")
            if res is not None:
                show_products(res["data"])
                show_pagination(res["pagination"])

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res)

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            res = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if res:
                show_products([res])

        elif choice == "4":
            fields = ask_product_fields()
            res = try_api(c.create_raw, fields, success_msg=f"Product '{fields['name']}' created")
            if res:
                console.print(Panel(f"Created product: [green]{res['id']}[/green]"))
                refresh_product_cache()

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if current:
                res = try_api(c.update_product, pid, ask_product_fields(current),
                              success_msg=f"Product {pid} updated")
                if res:
                    show_products([res])
                    refresh_product_cache()

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"Delete product {pid}?", default=False):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                refresh_product_cache()

        elif choice == "7":
            res = try_api(c.stats, success_msg="Statistics loaded")
            if res:
                show_stats(res)

        elif choice.lower() in ("q", "quit", "exit"):
            console.print("[bold]👋 Bye[/bold]")
            break

        else:
            status_message = f"Error: unknown option '{choice}'"


def main():
    try:
        menu()
    except (KeyboardInterrupt, EOFError):
        console.print("\n[bold]👋 Bye[/bold]")


if __name__ == "__main__":
    main()
