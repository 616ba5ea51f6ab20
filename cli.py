# cli.py
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pystore import StoreClient, StoreAPIError

console = Console()
c = StoreClient(
    base_url=os.getenv("STORE_API_URL", "http://127.0.0.1:3000"),
    api_key=os.getenv("API_KEY", "secret-key-123"),
)

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
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=32)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=14)
    table.add_column("Stock", justify="center", width=7)

    for p in products:
        stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            stock
        )
    console.print(table)


def show_page(page: Dict[str, Any]):
    show_products(page.get("data", []))
    console.print(
        f"[dim]Page {page.get('page')} of {page.get('totalPages')} "
        f"({page.get('total')} matching, {page.get('limit')} per page)[/dim]"
    )


def show_stats(stats: Dict[str, Any]):
    prices = stats.get("priceStats", {})

    def money(v):
        return "-" if v is None else f"${v:.2f}"

    table = Table(box=box.ROUNDED, header_style="bold yellow", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total products", str(stats.get("totalProducts", 0)))
    table.add_row("In stock", f"[green]{stats.get('inStock', 0)}[/green]")
    table.add_row("Out of stock", f"[red]{stats.get('outOfStock', 0)}[/red]")
    table.add_row("Cheapest", money(prices.get("min")))
    table.add_row("Most expensive", money(prices.get("max")))
    table.add_row("Average price", money(prices.get("average")))
    for category, count in stats.get("categories", {}).items():
        table.add_row(f"🏷️ {category}", str(count))
    console.print(Panel(table, title="📊 Catalog Statistics", border_style="yellow"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with error reporting
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the result, or None after printing the error.
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
        status_message = f"Error: {e}"
        lines = [str(e)] + [f"  • {d}" for d in e.details]
        console.print(show_status("\n".join(lines), False))
        return None
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_cache():
    global product_cache
    page = try_api(c.list_products, limit=1000)
    product_cache = page.get("data", []) if page else []


def get_product_completer():
    if not product_cache:
        refresh_cache()
    ids = [p.get("id", "") for p in product_cache]
    names = [p.get("name", "") for p in product_cache]
    return WordCompleter([n for n in ids + names if n], ignore_case=True)


def get_category_completer():
    categories = sorted({p.get("category", "") for p in product_cache})
    return WordCompleter([cat for cat in categories if cat], ignore_case=True)


def resolve_product_id(raw: str) -> str:
    # allow picking a product by name from the completion list
    for p in product_cache:
        if p.get("name", "").lower() == raw.lower():
            return p["id"]
    return raw


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ PyStore SDK",
        "[bold blue]Product Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: Optional[float] = None) -> Optional[float]:
    # blank answer means "no value" when there is no default
    while True:
        raw = Prompt.ask(message, default="" if default is None else str(default))
        if not raw.strip():
            return default
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_stock(message: str) -> Optional[bool]:
    answer = Prompt.ask(message, choices=["yes", "no", "skip"], default="skip")
    return None if answer == "skip" else answer == "yes"


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "➕ Create product"),
            ("2", "🔍 Search products", "6", "✏️ Update product"),
            ("3", "📊 Statistics", "7", "🗑️ Delete product"),
            ("4", "ℹ️ Get product by ID", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            category = prompt_with_autocomplete("🏷️ Category (blank for all)", completer=get_category_completer())
            in_stock = ask_stock("In stock only?")
            max_price = ask_float("💰 Max price (blank for any)")
            page = Prompt.ask("Page", default="1")
            limit = Prompt.ask("Per page", default="10")
            result = try_api(c.list_products, category.strip() or None, in_stock, max_price,
                             page, limit, success_msg="Products loaded successfully")
            if result is not None:
                show_page(result)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res.get("results", []), title=f"🔍 {res.get('count', 0)} match(es)")

        elif choice == "3":
            res = try_api(c.stats, success_msg="Statistics loaded")
            if res is not None:
                show_stats(res)

        elif choice == "4":
            pid = resolve_product_id(prompt_with_autocomplete("Enter product ID", completer=get_product_completer()))
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if resp:
                show_products([resp])

        elif choice == "5":
            name = prompt_with_autocomplete("Enter product name")
            description = prompt_with_autocomplete("Enter description")
            price = ask_float("💰 Price in dollars", default=10.0)
            category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer())
            in_stock = Confirm.ask("In stock?", default=True)
            resp = try_api(
                c.create_product, name, description, price, category, in_stock,
                success_msg=f"Product '{name}' created successfully"
            )
            if resp:
                show_products([resp])
                refresh_cache()

        elif choice == "6":
            pid = resolve_product_id(prompt_with_autocomplete("Enter product ID", completer=get_product_completer()))
            console.print("[dim]Leave a field blank to keep its current value.[/dim]")
            fields = {
                "name": prompt_with_autocomplete("New name").strip() or None,
                "description": prompt_with_autocomplete("New description").strip() or None,
                "price": ask_float("💰 New price"),
                "category": prompt_with_autocomplete("🏷️ New category", completer=get_category_completer()).strip() or None,
                "in_stock": ask_stock("In stock?"),
            }
            resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
            if resp:
                show_products([resp])
                refresh_cache()

        elif choice == "7":
            pid = resolve_product_id(prompt_with_autocomplete("Enter product ID", completer=get_product_completer()))
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    refresh_cache()

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for using PyStore! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
