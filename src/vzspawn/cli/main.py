"""Main CLI implementation using Typer."""

import asyncio
from pathlib import Path
from typing import Any, Callable, Coroutine, Optional

import asyncssh
import typer
from pydantic import ValidationError
from rich.console import Console

from vzspawn.cli.commands import (
    create_instance,
    destroy_instance,
    show_status,
    validate_config,
)
from vzspawn.config import ConfigManager, DEFAULT_CONFIG_FILE
from vzspawn.errors import VzSpawnError


# Create Typer app
app = typer.Typer(
    name="vzspawnctl",
    help="vzspawn - Virtuozzo container provisioning",
    add_completion=False,
)

# Console for rich output
console = Console()


def _run_cli_command(
    handler: Callable[..., Coroutine[Any, Any, None]],
    config: Optional[Path],
    **kwargs: Any,
):
    """Helper to run a CLI command with a config manager and error handling."""
    try:
        manager = ConfigManager(config_file=config)
        asyncio.run(handler(manager, **kwargs))
    except asyncio.TimeoutError as e:
        console.print("[red]Error:[/red] Timed out")
        raise typer.Exit(1) from e
    except (VzSpawnError, ValidationError, ValueError, OSError, asyncssh.Error) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def _config_option():
    return typer.Option(
        None, "--config", "-c", help=f"Configuration file (default: {DEFAULT_CONFIG_FILE})"
    )


@app.command("create")
def create_command(
    name: str = typer.Argument(..., help="Instance name"),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Give up after this many seconds"
    ),
    config: Optional[Path] = _config_option(),
):
    """Create, configure and boot the container for an instance."""
    _run_cli_command(create_instance, config=config, name=name, timeout=timeout)


@app.command("destroy")
def destroy_command(
    name: str = typer.Argument(..., help="Instance name"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Destroy without confirmation"
    ),
    config: Optional[Path] = _config_option(),
):
    """Stop and destroy the container for an instance."""
    if not force:
        confirm = typer.confirm(f"Destroy container for {name}?")
        if not confirm:
            raise typer.Abort()
    _run_cli_command(destroy_instance, config=config, name=name)


@app.command("status")
def status_command(
    name: Optional[str] = typer.Argument(
        None, help="Show status for a specific instance"
    ),
    config: Optional[Path] = _config_option(),
):
    """Show instances and their containers."""
    _run_cli_command(show_status, config=config, name=name)


# Config subcommands
config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")


@config_app.command("validate")
def config_validate_command(
    config: Optional[Path] = _config_option(),
):
    """Validate the configuration file."""
    _run_cli_command(validate_config, config=config)


def main():
    """Main entry point for CLI."""
    app()
