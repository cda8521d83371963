# cli.py - interactive marketplace client
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
from prompt_toolkit.completion import WordCompleter, PathCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.marketclient import MarketClient

console = Console()
c = MarketClient(base_url=os.environ.get("MARKETPLACE_URL", "http://127.0.0.1:5000"))

# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
logged_in_as: Optional[str] = None

CONDITIONS = ["New", "Like new", "Good", "Used", "For parts"]

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Small utility to unwrap API responses (sdk returns dict/list or Response objects)
# ---------------------------
def _unwrap_resp(resp: Any) -> Any:
    if resp is None:
        return None
    if hasattr(resp, "status_code"):
        try:
            return resp.json()
        except ValueError:
            return {"message": f"HTTP {resp.status_code}: {resp.text}"}
    return resp


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No listings yet[/italic yellow]")
        return

    table = Table(
        title="📦 Marketplace Listings",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=5, justify="right")
    table.add_column("Title", style="bold", width=24)
    table.add_column("Category", width=14)
    table.add_column("Condition", width=10)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Image", width=30)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("title", "N/A"),
            p.get("category", "N/A"),
            p.get("condition", "N/A"),
            f"${p.get('price', 0):.2f}",
            c.image_url(p),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def show_response(resp: Any, ok_codes=(200, 201)):
    body = _unwrap_resp(resp) or {}
    code = getattr(resp, "status_code", 200)
    message = body.get("message", str(body)) if isinstance(body, dict) else str(body)
    console.print(show_status(f"{code}: {message}", code in ok_codes))
    return code in ok_codes, body


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. Connection problems and
    HTTP errors raised by the SDK are reported and turned into None.
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
        return result
    except (OSError, ValueError) as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_category_completer():
    categories = sorted({p.get("category", "") for p in product_cache if p.get("category")})
    return WordCompleter(categories, ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    who = f"[green]{logged_in_as}[/green]" if logged_in_as else "[dim]not logged in[/dim]"
    header.add_row(
        "🛍️ Marketplace",
        "[bold blue]Listings CLI with Autocomplete[/bold blue]",
        f"{who} [dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


# ---------------------------
# Actions
# ---------------------------
def create_listing():
    global product_cache
    title = prompt_with_autocomplete("Title")
    category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer())
    condition = prompt_with_autocomplete(
        "Condition", completer=WordCompleter(CONDITIONS, ignore_case=True), default="Used"
    )
    price = ask_float("💰 Price in dollars", default=10.0)
    description = Prompt.ask("Description (optional)", default="")
    image_path = None
    if Confirm.ask("Attach an image?", default=False):
        image_path = prompt_with_autocomplete("Image path", completer=PathCompleter(expanduser=True))
        image_path = os.path.expanduser(image_path.strip()) or None

    resp = try_api(c.create_product, title, category, condition, price, description or None, image_path)
    if resp is None:
        return
    ok, body = show_response(resp)
    if ok:
        show_products([body["product"]])
        product_cache = try_api(c.list_products) or []


def register_account():
    username = Prompt.ask("Username")
    email = Prompt.ask("Email")
    password = Prompt.ask("Password", password=True)
    resp = try_api(c.register, username, email, password, success_msg=f"Registration sent for {username}")
    if resp is not None:
        show_response(resp)


def login_account():
    global logged_in_as
    username = Prompt.ask("Username")
    password = Prompt.ask("Password", password=True)
    resp = try_api(c.login, username, password)
    if resp is None:
        return
    ok, body = show_response(resp)
    if ok:
        logged_in_as = body.get("username", username)


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())

    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_row("1", "📦 Browse listings", "3", "📝 Register")
        menu_table.add_row("2", "➕ Create listing", "4", "🔑 Log in")
        menu_table.add_row("", "", "q", "👋 Quit")
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Listings loaded")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            create_listing()

        elif choice == "3":
            register_account()

        elif choice == "4":
            login_account()
            console.print(create_header())

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thanks for stopping by! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
