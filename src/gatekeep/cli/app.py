"""gatekeep CLI application using Typer.

Thin console shell around AuthenticationService: database setup,
one-shot register/login commands, the interactive signup/login loop,
and a hashing cost benchmark.
"""

import asyncio
import logging
import secrets
import sys
import time
from collections.abc import AsyncIterator, Callable, Coroutine
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Annotated, Any, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from gatekeep.application.services import AuthenticationService
from gatekeep.exceptions import StoreUnavailableError
from gatekeep.persistence.sqlalchemy import (
    CredentialRepositorySQLAlchemy,
    create_database_engine,
    create_session_maker,
    create_tables,
    drop_tables,
)
from gatekeep.schemas import (
    Authenticated,
    LoginResult,
    Registered,
    RegisterResult,
    RejectionReason,
)
from gatekeep.services import PasswordHashingService
from gatekeep.validation import (
    is_valid_email,
    is_valid_password,
    is_valid_username,
)
from gatekeep_config import Settings, get_settings

T = TypeVar("T")

EXIT_REJECTED = 1
EXIT_BAD_CONFIG = 2
EXIT_STORE_UNAVAILABLE = 3

# Recommended lower bound for a single verification
TARGET_VERIFY_MS = 50

FIELD_ERRORS = {
    "username": "Username can only contain letters, numbers and underscores",
    "email": "Please enter a valid email address",
    "password": "Password must be 8-255 characters",
}

app = typer.Typer(
    name="gatekeep",
    help="gatekeep - credential registration and login",
    no_args_is_help=True,
)
console = Console()


@lru_cache(maxsize=1)
def _configure_logging(log_level_str: str) -> None:
    """Configure application logging.

    Logs go to stderr so they never mix with command output. Noisy
    third-party loggers are kept at WARNING.
    """
    log_level = getattr(logging, log_level_str, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    logging.getLogger("gatekeep").setLevel(log_level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


def _load_settings() -> Settings:
    try:
        settings = get_settings()
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc.errors()[0]['msg']}")
        raise typer.Exit(code=EXIT_BAD_CONFIG) from exc
    _configure_logging(settings.log_level)
    return settings


@asynccontextmanager
async def _authentication_service(
    settings: Settings,
) -> AsyncIterator[AuthenticationService]:
    engine = create_database_engine(settings.database_url)
    try:
        yield AuthenticationService(
            credential_repository=CredentialRepositorySQLAlchemy(
                create_session_maker(engine),
            ),
            password_service=PasswordHashingService(
                rounds=settings.password_hash_rounds,
            ),
        )
    finally:
        await engine.dispose()


def _run(coro: Coroutine[Any, Any, T]) -> T:
    try:
        return asyncio.run(coro)
    except StoreUnavailableError as exc:
        console.print(f"[red]{exc.message}. Please try again later.[/red]")
        raise typer.Exit(code=EXIT_STORE_UNAVAILABLE) from exc


def _print_registration(result: RegisterResult, username: str) -> bool:
    if isinstance(result, Registered):
        console.print("\n[green]User registered successfully![/green]")
        console.print(f"Welcome, {username}! Registration successful.")
        return True

    if result.reason is RejectionReason.DUPLICATE_IDENTITY:
        console.print("\n[red]Username or Email already taken.[/red]")
    else:
        for field in result.invalid_fields:
            console.print(f"[red]{FIELD_ERRORS[field]}[/red]")
    return False


def _print_login(result: LoginResult) -> bool:
    if isinstance(result, Authenticated):
        console.print(f"\n[green]Welcome back, {result.username}![/green]")
        return True

    console.print("\n[red]Invalid username/email or password.[/red]")
    return False


def _prompt_until_valid(
    text: str,
    validator: Callable[[object], bool],
    error_message: str,
    *,
    hide_input: bool = False,
) -> str:
    while True:
        value = typer.prompt(text, hide_input=hide_input)
        if validator(value):
            return value
        console.print(f"[red]{error_message}[/red]")


@app.command("init-db")
def init_db() -> None:
    """Create the credentials table if it does not exist."""
    settings = _load_settings()
    console.print(f"Database: {settings.database_url_display}")

    async def _init() -> None:
        engine = create_database_engine(settings.database_url)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    _run(_init())
    console.print("[green]Database initialized successfully![/green]")


@app.command("drop-db")
def drop_db(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip the confirmation prompt"),
    ] = False,
) -> None:
    """Drop the credentials table (deletes every stored credential)."""
    settings = _load_settings()
    console.print(f"Database: {settings.database_url_display}")
    if not force:
        typer.confirm("This will DELETE ALL credentials. Continue?", abort=True)

    async def _drop() -> None:
        engine = create_database_engine(settings.database_url)
        try:
            await drop_tables(engine)
        finally:
            await engine.dispose()

    _run(_drop())
    console.print("[yellow]Credential tables dropped.[/yellow]")


@app.command("register")
def register(
    username: Annotated[str, typer.Option(prompt=True)],
    email: Annotated[str, typer.Option(prompt=True)],
) -> None:
    """Register a new user.

    The password is only read from a hidden prompt, never from argv.
    """
    settings = _load_settings()
    password = typer.prompt("Password", hide_input=True, confirmation_prompt=True)

    async def _register() -> RegisterResult:
        async with _authentication_service(settings) as service:
            return await service.register(username, email, password)

    if not _print_registration(_run(_register()), username):
        raise typer.Exit(code=EXIT_REJECTED)


@app.command("login")
def login(
    identifier: Annotated[str, typer.Argument(help="Username or email")],
) -> None:
    """Check a password for a username or email."""
    settings = _load_settings()
    password = typer.prompt("Password", hide_input=True)

    async def _login() -> LoginResult:
        async with _authentication_service(settings) as service:
            return await service.login(identifier, password)

    if not _print_login(_run(_login())):
        raise typer.Exit(code=EXIT_REJECTED)


async def _shell_signup(service: AuthenticationService) -> None:
    username = _prompt_until_valid(
        "Enter username", is_valid_username, FIELD_ERRORS["username"]
    )
    email = _prompt_until_valid("Enter email", is_valid_email, FIELD_ERRORS["email"])
    password = _prompt_until_valid(
        "Enter password",
        is_valid_password,
        FIELD_ERRORS["password"],
        hide_input=True,
    )
    _print_registration(await service.register(username, email, password), username)


async def _shell_login(service: AuthenticationService) -> bool:
    identifier = typer.prompt("Enter username or email")
    password = _prompt_until_valid(
        "Enter password", is_valid_password, "Invalid password", hide_input=True
    )
    return _print_login(await service.login(identifier, password))


async def _shell(settings: Settings) -> None:
    console.print("Welcome to the Login/Signup System")

    async with _authentication_service(settings) as service:
        while True:
            action = typer.prompt(
                "\nType 'login', 'signup', or 'exit'",
                default="",
                show_default=False,
            )
            action = action.strip().lower()

            try:
                if action == "signup":
                    await _shell_signup(service)
                elif action == "login":
                    if await _shell_login(service):
                        return
                elif action == "exit":
                    console.print("\nGoodbye!")
                    return
                else:
                    console.print("Invalid option. Please try again.")
            except StoreUnavailableError as exc:
                console.print(f"[red]{exc.message}. Please try again later.[/red]")


@app.command("shell")
def shell() -> None:
    """Interactive signup/login loop; exits after a successful login."""
    settings = _load_settings()
    asyncio.run(_shell(settings))


@app.command("benchmark")
def benchmark(
    rounds: Annotated[
        int,
        typer.Option(min=4, max=31, help="bcrypt cost factor to measure"),
    ] = PasswordHashingService.DEFAULT_ROUNDS,
    samples: Annotated[int, typer.Option(min=1, help="Verifications to time")] = 3,
) -> None:
    """Measure hash and verify latency for a bcrypt cost factor.

    Use this to choose PASSWORD_HASH_ROUNDS for the target hardware.
    """
    service = PasswordHashingService(rounds=rounds)
    password = secrets.token_urlsafe(12)

    start = time.perf_counter()
    password_hash = service.hash(password)
    hash_ms = (time.perf_counter() - start) * 1000

    timings = []
    for _ in range(samples):
        start = time.perf_counter()
        service.verify(password, password_hash)
        timings.append((time.perf_counter() - start) * 1000)
    verify_ms = sum(timings) / len(timings)

    table = Table(title=f"bcrypt cost {rounds}")
    table.add_column("Operation")
    table.add_column("Milliseconds", justify="right")
    table.add_row("hash", f"{hash_ms:.1f}")
    table.add_row("verify (avg)", f"{verify_ms:.1f}")
    console.print(table)

    if verify_ms < TARGET_VERIFY_MS:
        console.print(
            f"[yellow]Verification is below {TARGET_VERIFY_MS} ms; "
            "consider a higher PASSWORD_HASH_ROUNDS.[/yellow]"
        )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
