"""Main CLI application for drillbit."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from drillbit import __version__
from drillbit.backends import get_backend_class
from drillbit.config.parser import ConfigError
from drillbit.core.installer import InstallError, InstallResult, PluginInstaller
from drillbit.core.project import Project
from drillbit.utils.platform import PluginsDirectoryError, get_plugins_directory

# Create the main Typer app
app = typer.Typer(
    name="drillbit",
    help="Install Roblox Studio plugins declared in drillbit.toml",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)

# Set up logger for the drillbit package
logger = logging.getLogger("drillbit")


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2+=DEBUG (3+ also shows source paths)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logger.setLevel(level)

    # Only add handler if not already configured
    if not logger.handlers:
        handler = RichHandler(
            console=error_console,
            show_time=verbosity >= 2,
            show_path=verbosity >= 3,
            rich_tracebacks=True,
        )
        handler.setLevel(level)
        logger.addHandler(handler)
    else:
        for h in logger.handlers:
            h.setLevel(level)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]\u2713[/green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]\u26a0[/yellow] {message}")


def print_result(result: InstallResult) -> None:
    """Print the outcome of a single plugin install."""
    if result.skipped:
        print_warning(result.message)
    else:
        print_success(result.message)


def get_project(path: Path | None = None) -> Project:
    """Get the current project, raising an error if not found."""
    try:
        return Project.load(path)
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(1) from e
    except ConfigError as e:
        print_error(f"Failed to read config: {e}")
        raise typer.Exit(1) from e


@app.callback()
def callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase verbosity (-v info, -vv debug, -vvv debug with source paths)",
        ),
    ] = 0,
) -> None:
    """drillbit - Roblox Studio plugin installer."""
    setup_logging(verbose)


@app.command()
def version() -> None:
    """Show the drillbit version."""
    console.print(f"drillbit {__version__}")


@app.command()
def install(
    plugins_dir: Annotated[
        Path | None,
        typer.Option(
            "--plugins-dir",
            "-d",
            help="Directory to install into (defaults to the Roblox Studio plugins directory)",
        ),
    ] = None,
    path: Annotated[
        Path | None,
        typer.Option(
            "--path",
            "-p",
            help="Project directory containing drillbit.toml",
        ),
    ] = None,
) -> None:
    """Install every plugin listed in drillbit.toml.

    Plugins whose content already exists in the plugins directory, under
    any file name, are skipped.
    """
    project = get_project(path)

    try:
        destination = get_plugins_directory(plugins_dir)
    except PluginsDirectoryError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    if project.plugins:
        console.print(f"Installing {len(project.plugins)} plugin(s) into {destination}...")

    try:
        installer = PluginInstaller(project, destination, reporter=print_result)
        summary = installer.install()
    except InstallError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    if not summary.results:
        console.print("No plugins to install")
        return

    console.print(
        f"Plugins installed successfully: "
        f"{summary.installed_count} written, {summary.skipped_count} skipped"
    )


@app.command("list")
def list_plugins(
    path: Annotated[
        Path | None,
        typer.Option(
            "--path",
            "-p",
            help="Project directory containing drillbit.toml",
        ),
    ] = None,
) -> None:
    """List the plugins declared in drillbit.toml."""
    project = get_project(path)

    if not project.plugins:
        console.print("No plugins declared")
        return

    table = Table(title="Plugins")
    table.add_column("Plugin", style="cyan")
    table.add_column("Kind", style="green")
    table.add_column("Source", style="dim")
    table.add_column("Plugin ID")

    for name, source in project.plugins.items():
        # plugin_id never touches the network
        backend = get_backend_class(source.kind)(project.root)
        plugin_id = backend.plugin_id(source, name, project.name)
        table.add_row(name, source.kind, source.describe(), plugin_id)

    console.print(table)
