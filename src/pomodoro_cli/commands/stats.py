"""Statistics commands for recorded work sessions."""

import typer
from rich.table import Table

from pomodoro_cli.models.focus.analytics import StatsAggregator
from pomodoro_cli.models.focus.heatmap import HeatmapBucketizer
from pomodoro_cli.models.focus.ui import (
    format_duration,
    heatmap_text,
    render_progress_bar,
)
from pomodoro_cli.utils.ui.console import get_console

from .utils import get_store

console = get_console()
app = typer.Typer(help="Work session statistics")


def _print_buckets(title: str, buckets, trim_year: bool) -> None:
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")
    if not buckets:
        console.print(
            "[dim]No data available yet. "
            "Complete some Pomodoro sessions to see statistics![/dim]\n"
        )
        return

    max_minutes = max(b.minutes for b in buckets)
    for bucket in buckets:
        label = bucket.label[5:] if trim_year else bucket.label
        bar = render_progress_bar(bucket.minutes, max_minutes, width=20)
        console.print(
            f"  {label:8s} {bar}  {format_duration(bucket.total_seconds):>8s}"
        )
    total = sum(b.total_seconds for b in buckets)
    console.print(f"\n  Total: [bold]{format_duration(total)}[/bold]\n")


@app.command("today")
def show_today(
    output: str = typer.Option(None, "--output", "-o", help="Output format (json)"),
):
    """Show today's total work time."""
    stats = StatsAggregator(get_store())
    seconds = stats.today_total()

    if output == "json":
        console.print_json(
            data={"date": stats.today().isoformat(), "total_seconds": seconds}
        )
        return

    date_str = stats.today().strftime("%B %d, %Y")
    console.print(f"\n[bold cyan]🍅 Today - {date_str}[/bold cyan]")
    console.print(f"Focus Time: [bold]{format_duration(seconds)}[/bold]\n")


@app.command("week")
def show_week(
    tag: str = typer.Option(None, "--tag", "-t", help="Only count this tag"),
    output: str = typer.Option(None, "--output", "-o", help="Output format (json)"),
):
    """Show daily work time for the past week."""
    buckets = StatsAggregator(get_store()).weekly(tag)

    if output == "json":
        console.print_json(data=[b._asdict() for b in buckets])
        return

    _print_buckets(f"Weekly Activity - {tag or 'All Tags'}", buckets, trim_year=True)


@app.command("month")
def show_month(
    tag: str = typer.Option(None, "--tag", "-t", help="Only count this tag"),
    output: str = typer.Option(None, "--output", "-o", help="Output format (json)"),
):
    """Show work time per month (last 12 months with data)."""
    buckets = StatsAggregator(get_store()).monthly(tag)

    if output == "json":
        console.print_json(data=[b._asdict() for b in buckets])
        return

    _print_buckets(f"Monthly Activity - {tag or 'All Tags'}", buckets, trim_year=False)


@app.command("heatmap")
def show_heatmap(
    output: str = typer.Option(None, "--output", "-o", help="Output format (json)"),
):
    """Show the daily activity heatmap for the last six months."""
    bucketizer = HeatmapBucketizer(get_store())

    if output == "json":
        cells = bucketizer.cells()
        console.print_json(
            data=[
                {
                    "date": c.date.isoformat(),
                    "total_seconds": c.total_seconds,
                    "intensity_tier": c.intensity_tier,
                }
                for c in cells
            ]
        )
        return

    console.print("\n[bold green]📅 Activity Heatmap (Last 6 Months)[/bold green]\n")
    console.print(heatmap_text(bucketizer.weeks()))


@app.command("history")
def show_history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of sessions to show"),
):
    """Show the most recent sessions."""
    sessions = get_store().get_recent_sessions(limit)

    if not sessions:
        console.print("[yellow]No sessions recorded yet[/yellow]")
        return

    table = Table(title=f"Recent Sessions ({len(sessions)})", show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Tag")
    table.add_column("Duration", justify="right")

    for session in sessions:
        table.add_row(
            session.start_time.strftime("%Y-%m-%d %H:%M"),
            session.session_type.title(),
            session.tag,
            format_duration(session.duration),
        )

    console.print(table)
