"""
Main command-line interface for File Switcher.

The CLI acts as a minimal editor host: every file passed to ``resolve`` is
treated as the newly active file, in order, against one shared session.
"""
import sys
import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from file_switcher import __version__
from file_switcher.api import get_config_manager, get_file_switcher, shutdown
from file_switcher.components.workspace import Workspace, find_project_root
from file_switcher.constants import EXTENSION_ID
from file_switcher.utils.logging import setup_logging, get_logger

# Create the app
app = typer.Typer(help="File Switcher: jump between friend files in a workspace")
logger = get_logger(__name__)
console = Console()

# Settings that can be written with `set`, mapped to the action setting they feed
SETTABLE = {
    "log.logLevel": "log.logLevel",
    "extensions.extensions1": "extensions",
    "extensions.extensions2": "extensions",
    "cache.pathCount": "cache.pathCount",
}


def version_callback(value: bool):
    """Display version information and exit."""
    if value:
        console.print(f"File Switcher version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False, "--debug", "-d", help="Enable debug output"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Settings file (defaults to ~/.config/file-switcher/config.toml)"
    ),
    version: bool = typer.Option(
        False, "--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """File Switcher: jump between friend files in a workspace"""
    setup_logging("debug" if debug else "warning")
    ctx.obj = {"debug": debug, "config_file": config_file}


def _build_workspace(files: List[Path], workspace_dirs: Optional[List[Path]]) -> Workspace:
    if workspace_dirs:
        return Workspace(workspace_dirs)

    project_root = find_project_root(files[0].parent)
    return Workspace([project_root or Path.cwd()])


async def _resolve_files(
    files: List[Path],
    workspace: Workspace,
    debug: bool,
    open_target: bool,
    log_to_file: bool,
) -> List[Optional[str]]:
    config_manager = get_config_manager()
    if debug:
        config_manager.update("log.logLevel", "debug")

    switcher = get_file_switcher(workspace, log_to_file=log_to_file)
    if not await switcher.activate():
        console.print("[bold red]Error:[/bold red] No workspace folder to search in.")
        sys.exit(1)

    results = []
    for file_path in files:
        results.append(await switcher.on_did_change_active_editor(str(file_path)))

    if open_target:
        await switcher.switch_file(typer.launch)

    return results


@app.command()
def resolve(
    ctx: typer.Context,
    files: List[Path] = typer.Argument(
        ..., help="Files to resolve, in the order they become active"
    ),
    workspace_dirs: Optional[List[Path]] = typer.Option(
        None, "--workspace", "-w", help="Workspace folder (repeatable). Defaults to the detected project root."
    ),
    open_target: bool = typer.Option(
        False, "--open", "-o", help="Open the friend of the last file with the default application"
    ),
    log_file: bool = typer.Option(
        False, "--log-file", help="Also write logs to the log directory"
    ),
):
    """Find the friend file of each FILE."""
    files = [path.absolute() for path in files]
    workspace = _build_workspace(files, workspace_dirs)

    try:
        get_config_manager(ctx.obj["config_file"])
        results = asyncio.run(_resolve_files(
            files, workspace, ctx.obj["debug"], open_target, log_file
        ))
    except Exception as e:
        logger.exception(f"Error resolving friend files: {str(e)}")
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        sys.exit(1)

    table = Table(title="Friend files")
    table.add_column("File", style="cyan")
    table.add_column("Friend", style="green")
    for file_path, friend in zip(files, results):
        table.add_row(str(file_path), friend or "[dim]not found[/dim]")
    console.print(table)

    switcher = get_file_switcher()
    cache = switcher.session.cache
    console.print(
        f"Cache entries: {len(cache)}/{cache.capacity}, "
        f"est. size {cache.estimated_byte_size() / 1024:.2f} KiB"
    )
    shutdown()

    if not any(results):
        sys.exit(1)


@app.command("config")
def show_config(ctx: typer.Context):
    """Show the effective settings."""
    config_manager = get_config_manager(ctx.obj["config_file"])
    for setting in ("log.logLevel", "extensions", "cache.pathCount"):
        config_manager.validated(setting)
    config = config_manager.config

    table = Table(title=f"{EXTENSION_ID} settings ({config_manager.config_file})")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("log.logLevel", config.log.log_level)
    table.add_row("extensions.extensions1", config.extensions.extensions1)
    table.add_row("extensions.extensions2", config.extensions.extensions2)
    table.add_row("cache.pathCount", str(config.cache.path_count))
    console.print(table)
    shutdown()


@app.command("set")
def set_setting(
    ctx: typer.Context,
    setting: str = typer.Argument(..., help=f"One of: {', '.join(SETTABLE)}"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change a setting and save it to the settings file."""
    if setting not in SETTABLE:
        console.print(f"[bold red]Error:[/bold red] Unknown setting: {setting}")
        sys.exit(1)

    config_manager = get_config_manager(ctx.obj["config_file"])

    new_value = value
    if setting == "cache.pathCount":
        try:
            new_value = int(value)
        except ValueError:
            pass

    config_manager.update(setting, new_value)
    if config_manager.validated(SETTABLE[setting]) is None:
        console.print(f"[bold red]Error:[/bold red] Invalid value for {setting}: {value}")
        shutdown()
        sys.exit(1)

    try:
        config_manager.save_config()
    except OSError as e:
        logger.exception(f"Error saving settings: {str(e)}")
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        sys.exit(1)

    console.print(f"[green]{setting}[/green] set to {new_value}")
    shutdown()
