"""Configuration commands."""

import sqlite3

import typer
from pydantic import ValidationError

from pomodoro_cli.config import get_config_manager
from pomodoro_cli.models.focus.engine import CONFIG_KEYS, TimerEngine
from pomodoro_cli.models.focus.state import (
    DEFAULT_BREAK_SECONDS,
    DEFAULT_WORK_SECONDS,
    TimerMode,
    clamp_duration,
)
from pomodoro_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
)
from pomodoro_cli.utils.logger import get_logger
from pomodoro_cli.utils.ui.console import get_console

from .utils import get_store

console = get_console()
app = typer.Typer(help="Configuration management")

DURATION_KEYS = ("work", "break")


def _save_duration(mode: TimerMode, seconds: int) -> int:
    """Clamp and store a duration, exiting with an error if it cannot be saved."""
    value = clamp_duration(mode, seconds)
    try:
        get_store().set_config(CONFIG_KEYS[mode], str(value))
    except (sqlite3.Error, OSError) as e:
        get_logger("config").warning("Could not save %s duration", mode, exc_info=True)
        console.print(f"[red]Could not save {mode} duration: {e}[/red]")
        raise typer.Exit(ERROR_GENERAL)
    return value


@app.command("show")
def show_config(
    output: str = typer.Option(None, "--output", "-o", help="Output format (json)"),
):
    """Show timer durations and settings."""
    engine = TimerEngine(get_store())
    data = {
        "work_minutes": engine.work_duration // 60,
        "break_minutes": engine.break_duration // 60,
        **get_config_manager().config.model_dump(),
    }

    if output == "json":
        console.print_json(data=data)
        return

    console.print(f"work = {data['work_minutes']} min")
    console.print(f"break = {data['break_minutes']} min")
    for section in ("notifications", "storage"):
        for key, value in data[section].items():
            console.print(f"{section}.{key} = {value}")


@app.command("set")
def set_config(
    key: str = typer.Argument(..., help="'work', 'break' or a dotted setting key"),
    value: str = typer.Argument(..., help="Minutes for durations, otherwise the value"),
):
    """Set a duration (in minutes) or a setting."""
    if key in DURATION_KEYS:
        try:
            minutes = int(value)
        except ValueError:
            console.print(f"[red]Duration must be whole minutes: {value}[/red]")
            raise typer.Exit(ERROR_INVALID_ARGS)

        seconds = _save_duration(key, minutes * 60)
        console.print(f"[green]✓ {key} = {seconds // 60} min[/green]")
        return

    manager = get_config_manager()
    try:
        manager.set(key, value)
    except KeyError:
        console.print(f"[red]Unknown setting: {key}[/red]")
        raise typer.Exit(ERROR_NOT_FOUND)
    except ValidationError as e:
        console.print(f"[red]Invalid value for {key}: {e.errors()[0]['msg']}[/red]")
        raise typer.Exit(ERROR_INVALID_ARGS)
    console.print(f"[green]✓ {key} = {manager.get(key)}[/green]")


@app.command("reset")
def reset_config():
    """Reset settings and durations to defaults."""
    _save_duration("work", DEFAULT_WORK_SECONDS)
    _save_duration("break", DEFAULT_BREAK_SECONDS)
    get_config_manager().reset()
    console.print("[green]✓ Configuration reset[/green]")
