"""Main entry point for Pomodoro CLI."""

import typer

from pomodoro_cli import __version__
from pomodoro_cli.commands import config, focus, stats, tags
from pomodoro_cli.utils.ui.console import get_console

app = typer.Typer(
    name="pomodoro",
    help="Terminal Pomodoro timer with tagged sessions and statistics",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(focus.app, name="focus", help="Run the full-screen timer")
app.add_typer(stats.app, name="stats", help="Weekly, monthly and heatmap statistics")
app.add_typer(tags.app, name="tags", help="Tag management")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Pomodoro CLI[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
