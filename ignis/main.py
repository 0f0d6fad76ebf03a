"""
Command-line interface for running Ignis applications.

``ignis run package.module:app`` imports an application (or a factory
returning one), applies an optional config file, and serves it until
interrupted.
"""

import asyncio
import importlib
import logging
import sys
from typing import Any, Optional

import typer

from . import __version__
from .application.app import Ignis
from .core.exceptions import IgnisError, InvalidArgumentError
from .core.services.event_bus import EventEmitter
from .infrastructure.config.envar import missing_variables
from .infrastructure.config.loader import ConfigLoader
from .infrastructure.config.models import LoggingConfig
from .infrastructure.config.store import ConfigStore
from .infrastructure.logging.setup import setup_logging

# Create CLI application
cli = typer.Typer(
    name="ignis",
    help="Application bootstrapping micro-framework"
)

logger = logging.getLogger(__name__)


@cli.command()
def run(
    target: str = typer.Argument(
        ..., help="Application to run, as module:attribute"
    ),
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Port to listen on (default: PORT)"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file applied to app.config"
    ),
    log_level: str = typer.Option(
        "INFO", "--log-level", envvar="IGNIS_LOG_LEVEL", help="Logging level"
    )
) -> None:
    """Start an Ignis application."""

    setup_logging(LoggingConfig(level=log_level))

    try:
        app = load_application(target)
        if config_file:
            ConfigLoader().apply(app.config, config_file)
    except (IgnisError, ImportError, OSError, ValueError) as e:
        typer.echo(f"Error loading application: {e}", err=True)
        sys.exit(1)

    try:
        asyncio.run(run_application(app, port))
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except Exception as e:
        logger.error(f"Application failed to start: {e}")
        sys.exit(1)


@cli.command()
def validate_config(
    config_file: str = typer.Argument(...,
                                      help="Configuration file to validate")
) -> None:
    """Validate a configuration file, resolving its environment variables."""

    store = ConfigStore(EventEmitter())
    loader = ConfigLoader()

    try:
        data = loader.load_file(config_file)
        missing = missing_variables(data, store.environ)
        if missing:
            typer.echo(f"Configuration validation failed: missing envars: "
                       f"{', '.join(missing)}", err=True)
            sys.exit(1)
        store.update(data)
    except Exception as e:
        typer.echo(f"Configuration validation failed: {e}", err=True)
        sys.exit(1)

    typer.echo(f"Configuration file {config_file} is valid")
    for key in store.to_dict():
        typer.echo(f"  {key}")


@cli.command()
def version() -> None:
    """Show the Ignis version."""
    typer.echo(f"ignis {__version__}")


def load_application(target: str) -> Ignis:
    """
    Import the application named by ``module:attribute``.

    The attribute may be an ``Ignis`` instance or a zero-argument factory
    returning one; ``attribute`` defaults to ``app``.

    Args:
        target: Import path of the application

    Returns:
        The application instance
    """
    module_name, _, attribute = target.partition(':')
    module = importlib.import_module(module_name)

    obj: Any = getattr(module, attribute or 'app', None)
    if obj is None:
        raise InvalidArgumentError(f"'{target}' does not name an application")

    if not isinstance(obj, Ignis) and callable(obj):
        obj = obj()

    if not isinstance(obj, Ignis):
        raise InvalidArgumentError(
            f"'{target}' is a {type(obj).__name__}, not an Ignis application")
    return obj


async def run_application(app: Ignis, port: Optional[int] = None) -> None:
    """
    Run the startup sequence, then serve until the listener closes.

    Args:
        app: Application to start
        port: Port to listen on (default: PORT)
    """
    await app.listen(port)

    wait_closed = getattr(app.root, 'wait_closed', None)
    if wait_closed is not None:
        await wait_closed()


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
