"""Command-line interface for booklending.

Built with Typer for commands and Rich for output.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import get_config
from .db import get_db
from .log import configure_logging
from .registry import LendingError, LendingRegistry, OwnerAccessController

# Create the main app
app = typer.Typer(
    name="booklending",
    help="Lend books from a shared catalog.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{escape(message)}[/dim]")


def get_registry() -> LendingRegistry:
    """Build a registry over the configured database and owner."""
    config = get_config()
    return LendingRegistry(OwnerAccessController(config.owner), get_db())


def resolve_caller(caller: Optional[str]) -> str:
    """Use --as if given, else BOOKLENDING_ACCOUNT."""
    account = caller or get_config().account
    if not account:
        print_error("No caller identity. Pass --as or set BOOKLENDING_ACCOUNT.")
        raise typer.Exit(1)
    return account


@app.callback()
def main_callback() -> None:
    """Lend books from a shared catalog."""
    config = get_config()
    errors = config.validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)
    configure_logging(config.log_level)


# ============================================================================
# Mutating Commands
# ============================================================================


@app.command("add-book")
def add_book(
    title: str = typer.Argument(..., help="Book title (exact match)"),
    copies: int = typer.Option(1, "--copies", "-c", help="Number of copies to add"),
    caller: Optional[str] = typer.Option(None, "--as", help="Calling account (must be the owner)"),
) -> None:
    """Add copies of a book to the catalog."""
    account = resolve_caller(caller)
    try:
        book = get_registry().add_book(account, title, copies)
    except LendingError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"{book.title} (id {book.id}) now has {book.total_copies} copies")


@app.command()
def borrow(
    book_id: int = typer.Argument(..., help="Book ID to borrow"),
    caller: Optional[str] = typer.Option(None, "--as", help="Borrowing account"),
) -> None:
    """Borrow a copy of a book."""
    account = resolve_caller(caller)
    try:
        get_registry().borrow(account, book_id)
    except LendingError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"{account} borrowed book {book_id}")


@app.command("return")
def return_book(
    book_id: int = typer.Argument(..., help="Book ID to return"),
    caller: Optional[str] = typer.Option(None, "--as", help="Returning account"),
) -> None:
    """Return a borrowed copy of a book."""
    account = resolve_caller(caller)
    try:
        get_registry().return_book(account, book_id)
    except LendingError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"{account} returned book {book_id}")


# ============================================================================
# Query Commands
# ============================================================================


@app.command()
def status(
    account: str = typer.Argument(..., help="Account to check"),
    book_id: int = typer.Argument(..., help="Book ID"),
) -> None:
    """Show the borrow status of an account for a book."""
    result = get_registry().status_of(account, book_id)
    console.print(f"{result.value} ({result.name})")


@app.command()
def books() -> None:
    """List every book in the catalog."""
    catalog = get_registry().list_books()
    if not catalog:
        print_info("No books in the catalog")
        return

    table = Table(title="Books", show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right")
    table.add_column("Title", style="cyan", no_wrap=False, max_width=40)
    table.add_column("Copies", justify="center")
    table.add_column("Borrowed", justify="center")
    table.add_column("Borrowers", style="green", max_width=30)

    for book in catalog:
        table.add_row(
            str(book.id),
            escape(book.title),
            str(book.total_copies),
            str(book.borrowed_count),
            escape(", ".join(book.distinct_borrowers)) or "-",
        )

    console.print(table)


@app.command()
def available() -> None:
    """List books with free copies."""
    results = get_registry().list_available()
    if not results:
        print_info("No books available")
        return

    table = Table(title="Available", show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right")
    table.add_column("Title", style="cyan", no_wrap=False, max_width=40)

    for book in results:
        table.add_row(str(book.id), escape(book.title))

    console.print(table)


@app.command()
def borrowed() -> None:
    """List titles that are currently on loan."""
    titles = get_registry().list_borrowed_titles()
    if not titles:
        print_info("No books on loan")
        return

    for title in titles:
        console.print(f"  {escape(title)}")


@app.command()
def borrowers() -> None:
    """List every account that has borrowed each book."""
    accounts = get_registry().list_borrowers()
    if not accounts:
        print_info("No borrowers yet")
        return

    for account in accounts:
        console.print(f"  {escape(account)}")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"booklending version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
