# cli.py
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

import requests

from sdk.products_client import ProductsAPIError, ProductsClient

console = Console()
c = ProductsClient(
    base_url=os.getenv("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
    api_key=os.getenv("API_KEY"),
)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], out: Optional[Console] = None, title: str = "📦 Products"):
    out = out or console
    if not products:
        out.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=36)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=8)

    for p in products:
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]",
        )
    out.print(table)


def show_page(page: Dict[str, Any], out: Optional[Console] = None):
    out = out or console
    title = f"📦 Products - page {page.get('page')} (limit {page.get('limit')}, {page.get('total')} matching)"
    show_products(page.get("data", []), out=out, title=title)


def show_product(product: Dict[str, Any], out: Optional[Console] = None):
    show_products([product], out=out, title=f"📦 {product.get('name', 'Product')}")


def show_stats(stats: Dict[str, Any], out: Optional[Console] = None):
    out = out or console
    table = Table(box=box.ROUNDED, header_style="bold blue")
    table.add_column("Category", style="bold")
    table.add_column("Products", justify="right")
    for category, count in sorted(stats.get("byCategory", {}).items()):
        table.add_row(category, str(count))
    out.print(Panel(table, title=f"📊 {stats.get('total', 0)} products", border_style="blue"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API errors are shown in the status panel and turn into None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except ProductsAPIError as e:
        status_message = f"Error: {e.message} ({e.status})"
        console.print(show_status(status_message, False))
        return None
    except requests.RequestException as e:
        status_message = f"Error: cannot reach the API ({e})"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache() -> List[Dict[str, Any]]:
    global product_cache
    page = try_api(c.list_products, limit=1000)
    product_cache = page["data"] if page else []
    return product_cache


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    return WordCompleter([p["id"] for p in product_cache], ignore_case=True)


def get_category_completer():
    categories = sorted({p["category"] for p in product_cache})
    return WordCompleter(categories, ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Products API",
        "[bold blue]Catalog console[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers
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
    return {
        "name": prompt_with_autocomplete("Name", default=current.get("name", "")),
        "description": prompt_with_autocomplete("Description", default=current.get("description", "")),
        "price": ask_float("💰 Price", default=current.get("price", 10.0)),
        "category": prompt_with_autocomplete(
            "🏷️ Category", completer=get_category_completer(), default=current.get("category", ""),
        ),
        "in_stock": Confirm.ask("In stock?", default=current.get("inStock", True)),
    }


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
            ("2", "🔍 Filter / search", "6", "🗑️ Delete product"),
            ("3", "ℹ️ Get product by ID", "7", "📊 Stats"),
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
            page = try_api(c.list_products, success_msg="Products loaded")
            if page is not None:
                show_page(page)

        elif choice == "2":
            category = prompt_with_autocomplete("Category (blank for any)", completer=get_category_completer())
            search = prompt_with_autocomplete("Name contains (blank for any)")
            page_no = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Page size", default=10)
            page = try_api(
                c.list_products, category or None, search or None, page_no, limit,
                success_msg="Filter applied",
            )
            if page is not None:
                show_page(page)

        elif choice == "3":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            product = try_api(c.get_product, pid)
            if product:
                show_product(product)

        elif choice == "4":
            fields = ask_product_fields()
            product = try_api(c.create_product, **fields, success_msg=f"Product '{fields['name']}' created")
            if product:
                show_product(product)
                refresh_product_cache()

        elif choice == "5":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if current:
                fields = ask_product_fields(current)
                product = try_api(c.update_product, pid, **fields, success_msg=f"Product {pid} updated")
                if product:
                    show_product(product)
                    refresh_product_cache()

        elif choice == "6":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    show_product(resp["product"])
                    refresh_product_cache()

        elif choice == "7":
            stats = try_api(c.stats)
            if stats:
                show_stats(stats)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
