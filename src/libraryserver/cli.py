"""Command-line interface for libraryserver.

Built with Typer for commands and Rich for output. Every command is one
request/response operation: write commands take the request body as a JSON
argument, results are printed as JSON followed by a status line, and
refusals are printed with their status code and exit with code 1.
"""

from typing import Callable, Optional, TypeVar

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.table import Table

from .addresses.schemas import AddressCreate, AddressResponse
from .config import get_config
from .customers.schemas import CustomerCreate, CustomerResponse, CustomerUpdate
from .db.schemas import UpsertResult
from .exceptions import BadRequestError, LibraryError
from .loans.schemas import LoanCreate, LoanResponse, LoanUpdate
from .logging_setup import setup_logging
from .media.schemas import MediumCreate, MediumResponse, MediumUpdate
from .service import LibraryService

T = TypeVar("T")
S = TypeVar("S", bound=BaseModel)

# Create the main app
app = typer.Typer(
    name="libraryserver",
    help="Manage library customers, addresses, media and loans.",
    no_args_is_help=True,
)

# Create sub-apps for command groups
address_app = typer.Typer(help="Postal addresses shared by customers.")
app.add_typer(address_app, name="address")
customer_app = typer.Typer(help="Library customers.")
app.add_typer(customer_app, name="customer")
medium_app = typer.Typer(help="Library media.")
app.add_typer(medium_app, name="medium")
loan_app = typer.Typer(help="Checkouts and returns.")
app.add_typer(loan_app, name="loan")

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(error: LibraryError) -> None:
    """Print a refused request and its error body."""
    body = error.as_dict()
    console.print(f"[bold red]Error:[/bold red] {body['status']} {body['code']}: {body['message']}")
    console.print_json(data=body)


def print_ok(note: Optional[str] = None) -> None:
    """Print the success status line."""
    suffix = f" ({note})" if note else ""
    console.print(f"[bold green]200[/bold green] OK{suffix}")


def _service() -> LibraryService:
    return LibraryService()


def _call(operation: Callable[..., T], *args) -> T:
    """Run a manager operation, turning refusals into exit code 1."""
    try:
        return operation(*args)
    except LibraryError as e:
        print_error(e)
        raise typer.Exit(1)


def _parse(schema: type[S], payload: str) -> S:
    """Parse a JSON request body."""
    try:
        return schema.model_validate_json(payload)
    except ValidationError as e:
        print_error(BadRequestError(f"invalid request body: {e.error_count()} error(s)"))
        raise typer.Exit(1)


def _respond(response_schema: type[BaseModel], records, note: Optional[str] = None) -> None:
    """Print one record or a list of records as JSON."""
    if isinstance(records, list):
        data = [response_schema.model_validate(r).model_dump(mode="json") for r in records]
    else:
        data = response_schema.model_validate(records).model_dump(mode="json")
    console.print_json(data=data)
    print_ok(note)


def _respond_upsert(response_schema: type[BaseModel], result: UpsertResult) -> None:
    _respond(response_schema, result.record, note=result.outcome.value)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (default: LIBRARYSERVER_LOG_LEVEL)"
    ),
) -> None:
    """Manage library customers, addresses, media and loans."""
    setup_logging(log_level or get_config().log_level)


@app.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    config = get_config()
    errors = config.validate()
    if errors:
        for error in errors:
            console.print(f"[bold red]Error:[/bold red] {error}")
        raise typer.Exit(1)

    service = _service()
    service.db.create_tables()
    console.print(f"[dim]Database ready at {service.db.db_path}[/dim]")
    print_ok()


# ============================================================================
# Address Commands
# ============================================================================


@address_app.command("list")
def address_list(
    postal_code: Optional[str] = typer.Option(None, "--postal-code", "-z", help="Exact postal code"),
    street: Optional[str] = typer.Option(
        None, "--street", "-s", help="Street prefix (case-sensitive), exact street with --postal-code"
    ),
) -> None:
    """List addresses, optionally by postal code, street prefix or both."""
    registry = _service().addresses
    if postal_code is not None and street is not None:
        addresses = registry.find_by_street_and_postal_code(street, postal_code)
    elif postal_code is not None:
        addresses = registry.find_by_postal_code(postal_code)
    elif street is not None:
        addresses = registry.find_by_street_prefix(street)
    else:
        addresses = registry.list_all()
    _respond(AddressResponse, addresses)


@address_app.command("add")
def address_add(
    payload: str = typer.Argument(..., help="Address as JSON"),
) -> None:
    """Store an address, reusing an existing row with the same street and postal code."""
    data = _parse(AddressCreate, payload)
    address = _call(_service().addresses.resolve_or_create, data)
    _respond(AddressResponse, address)


@address_app.command("delete")
def address_delete(
    address_id: int = typer.Argument(..., help="Address ID"),
) -> None:
    """Delete an address nobody lives at."""
    _call(_service().addresses.delete, address_id)
    print_ok()


# ============================================================================
# Customer Commands
# ============================================================================


@customer_app.command("get")
def customer_get(
    customer_id: int = typer.Argument(..., help="Customer ID"),
) -> None:
    """Show a customer."""
    customer = _call(_service().customers.get, customer_id)
    _respond(CustomerResponse, customer)


@customer_app.command("find")
def customer_find(
    last_name: Optional[str] = typer.Option(None, "--last-name", "-n", help="Exact last name"),
    address_id: Optional[int] = typer.Option(None, "--address-id", "-a", help="Address ID"),
    street: Optional[str] = typer.Option(None, "--street", "-s", help="Exact street line"),
) -> None:
    """Find customers by last name, address or street."""
    registry = _service().customers
    if last_name is not None:
        customers = registry.find_by_last_name(last_name)
    elif address_id is not None:
        customers = registry.find_by_address_id(address_id)
    elif street is not None:
        customers = registry.find_by_street(street)
    else:
        console.print("[dim]Give --last-name, --address-id or --street.[/dim]")
        raise typer.Exit(1)
    _respond(CustomerResponse, customers)


@customer_app.command("add")
def customer_add(
    payload: str = typer.Argument(..., help="Customer as JSON, address included"),
) -> None:
    """Register a new customer."""
    data = _parse(CustomerCreate, payload)
    customer = _call(_service().customers.create, data)
    _respond(CustomerResponse, customer)


@customer_app.command("update")
def customer_update(
    customer_id: int = typer.Argument(..., help="Customer ID"),
    payload: str = typer.Argument(..., help="Patch as JSON"),
) -> None:
    """Change a customer's address or email, creating the customer if unknown."""
    patch = _parse(CustomerUpdate, payload)
    result = _call(_service().customers.upsert, customer_id, patch)
    _respond_upsert(CustomerResponse, result)


@customer_app.command("delete")
def customer_delete(
    customer_id: int = typer.Argument(..., help="Customer ID"),
) -> None:
    """Delete a customer."""
    _call(_service().customers.delete, customer_id)
    print_ok()


# ============================================================================
# Medium Commands
# ============================================================================


@medium_app.command("get")
def medium_get(
    medium_id: int = typer.Argument(..., help="Medium ID"),
) -> None:
    """Show a medium."""
    medium = _call(_service().media.get, medium_id)
    _respond(MediumResponse, medium)


@medium_app.command("list")
def medium_list(
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Exact title"),
) -> None:
    """List media, optionally by title."""
    catalog = _service().media
    media = catalog.find_by_title(title) if title is not None else catalog.list_all()
    _respond(MediumResponse, media)


@medium_app.command("add")
def medium_add(
    payload: str = typer.Argument(..., help="Medium as JSON"),
) -> None:
    """Add a medium to the catalog."""
    data = _parse(MediumCreate, payload)
    medium = _call(_service().media.create, data)
    _respond(MediumResponse, medium)


@medium_app.command("update")
def medium_update(
    medium_id: int = typer.Argument(..., help="Medium ID"),
    payload: str = typer.Argument(..., help="Patch as JSON"),
) -> None:
    """Change genre, age rating, catalog number or shelf, creating the medium if unknown."""
    patch = _parse(MediumUpdate, payload)
    result = _call(_service().media.upsert, medium_id, patch)
    _respond_upsert(MediumResponse, result)


@medium_app.command("delete")
def medium_delete(
    medium_id: int = typer.Argument(..., help="Medium ID"),
) -> None:
    """Delete a medium."""
    _call(_service().media.delete, medium_id)
    print_ok()


# ============================================================================
# Loan Commands
# ============================================================================


@loan_app.command("get")
def loan_get(
    medium_id: int = typer.Argument(..., help="Medium ID"),
) -> None:
    """Show the loan of a medium (empty list when available)."""
    loans = _service().loans.find_by_medium_id(medium_id)
    _respond(LoanResponse, loans)


@loan_app.command("show")
def loan_show(
    loan_id: int = typer.Argument(..., help="Loan ID"),
) -> None:
    """Show a loan by its ID."""
    loan = _call(_service().loans.get, loan_id)
    _respond(LoanResponse, loan)


@loan_app.command("list")
def loan_list(
    customer_id: Optional[int] = typer.Option(None, "--customer-id", "-c", help="Customer ID"),
) -> None:
    """List loans, optionally of one customer."""
    manager = _service().loans
    loans = manager.find_by_customer_id(customer_id) if customer_id is not None else manager.list_all()
    _respond(LoanResponse, loans)


@loan_app.command("add")
def loan_add(
    payload: str = typer.Argument(..., help='Loan as JSON, e.g. {"customer": {"id": 7}, "medium": {"id": 42}}'),
) -> None:
    """Check a medium out to a customer."""
    data = _parse(LoanCreate, payload)
    loan = _call(_service().loans.create, data)
    _respond(LoanResponse, loan)


@loan_app.command("update")
def loan_update(
    loan_id: int = typer.Argument(..., help="Loan ID"),
    payload: str = typer.Argument(..., help="Patch as JSON"),
) -> None:
    """Change a loan's duration, creating a loan if the ID is unknown."""
    patch = _parse(LoanUpdate, payload)
    result = _call(_service().loans.upsert, loan_id, patch)
    _respond_upsert(LoanResponse, result)


@loan_app.command("return")
def loan_return(
    medium_id: int = typer.Argument(..., help="Medium ID"),
) -> None:
    """Return a medium by deleting its loan."""
    _service().loans.delete_by_medium_id(medium_id)
    print_ok()


@loan_app.command("overdue")
def loan_overdue() -> None:
    """Show overdue loans."""
    loans = _service().loans.list_overdue()

    if not loans:
        console.print("[dim]No overdue loans[/dim]")
        return

    table = Table(title="Overdue Loans", show_header=True, header_style="bold magenta")
    table.add_column("Loan", style="dim")
    table.add_column("Medium", style="cyan", max_width=30)
    table.add_column("Customer")
    table.add_column("Due")
    table.add_column("Overdue", justify="right")

    for loan in loans:
        title = loan.medium.title if loan.medium else f"#{loan.medium_id}"
        name = (
            f"{loan.customer.first_name} {loan.customer.last_name}"
            if loan.customer
            else f"#{loan.customer_id}"
        )
        table.add_row(
            str(loan.id),
            title,
            name,
            loan.due_at.date().isoformat(),
            f"[bold red]{loan.days_overdue}d[/bold red]",
        )

    console.print(table)


if __name__ == "__main__":
    app()
