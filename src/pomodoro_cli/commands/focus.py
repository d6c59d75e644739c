"""Focus mode command with the full-screen Pomodoro timer."""

import typer

from pomodoro_cli.config import get_config_manager
from pomodoro_cli.models.focus.analytics import StatsAggregator
from pomodoro_cli.models.focus.engine import TimerEngine
from pomodoro_cli.models.focus.heatmap import HeatmapBucketizer
from pomodoro_cli.models.focus.tags import TagSelection
from pomodoro_cli.models.focus.ui import TimerDisplay
from pomodoro_cli.utils.exit_codes import ERROR_NOT_FOUND
from pomodoro_cli.utils.notify import Notifier
from pomodoro_cli.utils.ui.console import get_console

from .utils import get_store

console = get_console()
app = typer.Typer(help="Focus mode with Pomodoro timer")


def build_display(tag: str | None = None) -> TimerDisplay:
    """Wire store, tag selection, engine and screens together."""
    store = get_store()
    selection = TagSelection(store)
    store.bind_selection(selection)

    if tag is not None:
        if tag not in selection.tags:
            console.print(f"[red]Unknown tag: {tag}[/red]")
            console.print("Add it with 'pomodoro tags add'.")
            raise typer.Exit(ERROR_NOT_FOUND)
        selection.index = selection.tags.index(tag)

    notifier = Notifier.from_config(get_config_manager().config.notifications)
    engine = TimerEngine(store, notifier=notifier)
    return TimerDisplay(
        engine,
        selection,
        StatsAggregator(store),
        HeatmapBucketizer(store),
        console=console,
    )


@app.callback(invoke_without_command=True)
def focus(ctx: typer.Context):
    """Start the timer when no subcommand is given."""
    if ctx.invoked_subcommand is None:
        start_focus(tag=None, work=None, rest=None)


@app.command("start")
def start_focus(
    tag: str = typer.Option(None, "--tag", "-t", help="Tag to record sessions under"),
    work: int = typer.Option(None, "--work", "-w", help="Work length in minutes"),
    rest: int = typer.Option(None, "--break", "-b", help="Break length in minutes"),
):
    """Open the full-screen timer."""
    display = build_display(tag)
    if work is not None:
        display.engine.set_work_duration(work * 60)
    if rest is not None:
        display.engine.set_break_duration(rest * 60)

    display.run()
