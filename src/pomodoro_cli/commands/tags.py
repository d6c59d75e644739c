"""Tag management commands."""

import typer

from pomodoro_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND, SUCCESS
from pomodoro_cli.utils.ui.console import get_console

from .utils import get_store

console = get_console()
app = typer.Typer(help="Manage session tags")


@app.command("list")
def list_tags():
    """List tags."""
    tags = get_store().get_tags()
    if not tags:
        console.print("[yellow]No tags defined[/yellow]")
        return
    for name in tags:
        console.print(f"  • {name}")


@app.command("add")
def add_tag(name: str = typer.Argument(..., help="Tag name")):
    """Add a tag."""
    name = name.strip()
    if not name:
        console.print("[red]Tag name cannot be empty[/red]")
        raise typer.Exit(ERROR_INVALID_ARGS)

    store = get_store()
    if name in store.get_tags():
        console.print(f"[yellow]Tag '{name}' already exists[/yellow]")
        return
    store.add_tag(name)
    console.print(f"[green]✓ Added tag '{name}'[/green]")


@app.command("remove")
def remove_tag(
    name: str = typer.Argument(..., help="Tag name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Remove a tag. Sessions already recorded under it are kept."""
    store = get_store()
    if name not in store.get_tags():
        console.print(f"[red]Tag not found: {name}[/red]")
        raise typer.Exit(ERROR_NOT_FOUND)

    if not yes and not typer.confirm(f"Delete tag '{name}'?"):
        raise typer.Exit(SUCCESS)

    store.delete_tag(name)
    console.print(f"[green]✓ Removed tag '{name}'[/green]")
