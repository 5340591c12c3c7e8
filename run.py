#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for the books service. All functionality is accessible
through command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action config
    python run.py --action seed --count 3
    python run.py --action test --test-type unit
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from temporal_books.core.config import validate_project_root
from temporal_books.core.logging import get_logger, log_with_source, setup_logging


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "config", "seed", "test", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output (INFO level logging).")
@click.option("--debug", "-d", is_flag=True, help="Enable debug output (DEBUG level logging).")
@click.option("--host", default=None, help="Server host (for server action).")
@click.option("--port", default=None, type=int, help="Server port (for server action).")
@click.option("--reload", is_flag=True, help="Enable auto-reload (for server action).")
@click.option("--count", default=3, type=int, help="Number of sample books (for seed action).")
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run (for test action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    count: int,
    test_type: str,
) -> None:
    """
    Books Service Entry Point.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # Create three sample books
        python run.py --action seed

        # View loaded configuration
        python run.py --action config
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "config":
        show_config(logger)
    elif action == "seed":
        asyncio.run(seed(logger, count))
    elif action == "test":
        run_tests(logger, test_type)
    elif action == "info":
        show_info()


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server."""
    from temporal_books.core.config import get_server_address

    default_host, default_port = get_server_address()
    server_host = host or default_host
    server_port = port or default_port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "temporal_books.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]
    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def show_config(logger) -> None:
    """Display loaded configuration."""
    from temporal_books.core.config import get_app_config

    try:
        app_config = get_app_config()
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)

    for title, section in (
        ("Application Settings", app_config.application),
        ("Database Settings", app_config.database),
        ("Logging Settings", app_config.logging),
    ):
        click.echo(f"\n{title} (from YAML):")
        click.echo("-" * 40)
        for key, value in section.model_dump().items():
            click.echo(f"  {key}: {value}")


async def seed(logger, count: int) -> None:
    """Create sample books through the full write path."""
    from temporal_books.core.config import get_app_config
    from temporal_books.core.database import close_client, get_database
    from temporal_books.repositories.book import BookStore
    from temporal_books.services.book import BookService
    from temporal_books.services.seed import seed_books

    store = BookStore(get_database(), get_app_config().database.collections)
    try:
        await store.ensure_indexes()
        books = await seed_books(BookService(store), count)
    finally:
        await close_client()

    for book in books:
        log_with_source(logger, "seed", "info", "Sample book created", entity_id=book.entity_id)
        click.echo(f"  {book.entity_id}: {book.isbn}")
    click.echo(click.style(f"\n{len(books)} sample books created", fg="green"))


def run_tests(logger, test_type: str) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type})

    target = "tests/" if test_type == "all" else f"tests/{test_type}"
    cmd = [sys.executable, "-m", "pytest", target, "-v"]

    click.echo(f"Running: {' '.join(cmd)}\n")
    result = subprocess.run(cmd)
    sys.exit(result.returncode)


def show_info() -> None:
    """Display application information."""
    from temporal_books.core.config import get_app_config

    application = get_app_config().application
    click.echo(application.name)
    click.echo("=" * 40)
    click.echo(f"Version: {application.version}")
    click.echo(f"Description: {application.description}")
    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the server")
    click.echo("  --action config   Display configuration")
    click.echo("  --action seed     Create sample books")
    click.echo("  --action test     Run test suite")
    click.echo("  --action info     Show this information")


if __name__ == "__main__":
    main()
