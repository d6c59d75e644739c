"""Full-screen timer UI: home, statistics and heatmap screens."""

import time
from typing import Literal

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .analytics import AggregateBucket, StatsAggregator
from .engine import TimerEngine
from .heatmap import HeatmapBucketizer, HeatmapCell, IntensityTier
from .state import TimerState
from .tags import StatsTagFilter, TagSelection

Screen = Literal["home", "stats", "heatmap", "tag_input", "delete_confirm"]
StatsView = Literal["weekly", "monthly"]

# "medium" and "high" share a glyph; only the colour differs.
TIER_GLYPHS: dict[IntensityTier, tuple[str, str]] = {
    "none": ("░", "bright_black"),
    "low": ("▒", "blue"),
    "medium": ("▓", "cyan"),
    "high": ("▓", "bright_cyan"),
    "max": ("█", "green"),
}

DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
ENTER_KEYS = ("\n", "\r")
ESCAPE_KEY = "\x1b"
BACKSPACE_KEYS = ("\x7f", "\b")

MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]  # fmt: skip

POLL_SECONDS = 0.1
TICK_SECONDS = 1.0


def render_progress_bar(value: float, max_value: float, width: int = 10) -> str:
    """Render a progress bar using block characters."""
    if max_value <= 0:
        ratio = 0.0
    else:
        ratio = min(value / max_value, 1.0)
    filled = int(ratio * width)
    return "█" * filled + "░" * (width - filled)


def format_duration(seconds: int) -> str:
    """Format seconds as hours and minutes."""
    hours, minutes = divmod(seconds // 60, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def render_home(
    state: TimerState,
    selection: TagSelection,
    prompt: RenderableType | None = None,
) -> RenderableType:
    """Countdown, tag list and durations, with an optional prompt panel below."""
    if state.mode == "work":
        title, color = "🍅 WORK", "red"
    else:
        title, color = "☕ BREAK", "green"
    if not state.running:
        color = "yellow"
        title += "  (paused)"

    timer = Text(state.format_time(), style=f"bold {color}", justify="center")
    bar = Text(
        render_progress_bar(state.progress(), 1.0, width=40)
        + f"  {int(state.progress() * 100)}%",
        style="dim",
        justify="center",
    )

    tags = Text(justify="center")
    for i, name in enumerate(selection.tags):
        if i == selection.index:
            tags.append(f" ▶ {name} ", style="bold magenta")
        else:
            tags.append(f"   {name} ", style="dim")
    if not selection.tags:
        tags.append("No tags - sessions are recorded as 'Work'", style="dim")

    settings = Text(
        f"Work: {state.work_duration // 60} min   Break: {state.break_duration // 60} min",
        style="cyan",
        justify="center",
    )

    body = Group(
        Text(title, style=f"bold {color}", justify="center"),
        Text(""),
        timer,
        Text(""),
        bar,
        Text(""),
        tags,
        Text(""),
        settings,
    )
    if prompt is not None:
        body = Group(body, Text(""), prompt)
    hints = (
        "[space] Start/Pause │ [r] Reset │ [t/T] Tag │ [+/-] Add/Delete Tag │ "
        "[w/W] Work ± │ [b/B] Break ± │ [s] Stats │ [m] Heatmap │ [q] Quit"
    )
    return _frame(body, hints)


def render_stats(
    buckets: list[AggregateBucket], view: StatsView, tag_label: str
) -> RenderableType:
    """Bar chart of weekly or monthly work minutes."""
    heading = Text(justify="center")
    heading.append("View: ")
    for name in ("weekly", "monthly"):
        style = "bold yellow" if name == view else "bright_black"
        heading.append(f"[ {name.title()} ]  ", style=style)
    heading.append("Tag: ")
    heading.append(f"◀ {tag_label} ▶", style="magenta")

    if not buckets:
        chart: RenderableType = Text(
            "No data available yet. Complete some Pomodoro sessions to see statistics!",
            style="bright_black",
            justify="center",
        )
    else:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("label", style="cyan")
        table.add_column("bar")
        table.add_column("minutes", justify="right")
        max_minutes = max(b.minutes for b in buckets)
        for bucket in buckets:
            label = bucket.label[5:] if view == "weekly" else bucket.label
            table.add_row(
                label,
                render_progress_bar(bucket.minutes, max_minutes, width=30),
                format_duration(bucket.total_seconds),
            )
        chart = Align.center(table)

    title = "Weekly" if view == "weekly" else "Monthly"
    body = Group(
        heading,
        Text(""),
        Panel(chart, title=f" {title} Activity (minutes) ", border_style="blue"),
    )
    hints = "[Tab] Toggle View │ [,/.] Change Tag │ [h] Home │ [m] Heatmap │ [q] Quit"
    return _frame(body, hints)


def heatmap_text(weeks: list[list[HeatmapCell | None]]) -> Text:
    """Month labels over a day-of-week by week grid."""
    text = Text()
    text.append("    ")
    last_month = 0
    for week in weeks:
        first = week[0]
        if first is not None and first.date.month != last_month:
            text.append(MONTH_LABELS[first.date.month - 1][0], style="yellow")
            last_month = first.date.month
        else:
            text.append(" ")
    text.append("\n")

    for day_idx, day_name in enumerate(DAY_LABELS):
        text.append(f"{day_name} ", style="white")
        for week in weeks:
            cell = week[day_idx]
            if cell is None:
                text.append(" ")
            else:
                glyph, color = TIER_GLYPHS[cell.intensity_tier]
                text.append(glyph, style=color)
        text.append("\n")
    return text


def render_heatmap(weeks: list[list[HeatmapCell | None]]) -> RenderableType:
    """Six-month activity grid with legend."""
    legend = Text(" Less ", justify="center")
    for tier in ("none", "low", "medium", "max"):
        glyph, color = TIER_GLYPHS[tier]
        legend.append(glyph, style=color)
        legend.append(" ")
    legend.append("More")

    body = Group(
        Text("📅 Activity Heatmap (Last 6 Months)", style="bold green", justify="center"),
        Text(""),
        Align.center(heatmap_text(weeks)),
        Panel(legend, title=" Legend "),
    )
    return _frame(body, "[h] Home │ [s] Stats │ [q] Quit")


def _frame(body: RenderableType, hints: str) -> Layout:
    layout = Layout()
    layout.split_column(
        Layout(name="body"),
        Layout(name="footer", size=2),
    )
    layout["body"].update(Align.center(body, vertical="middle"))
    layout["footer"].update(
        Align.center(Text(hints, style="bright_black"), vertical="middle")
    )
    return layout


class TimerDisplay:
    """Drives the engine once per second and routes keys to it."""

    def __init__(
        self,
        engine: TimerEngine,
        selection: TagSelection,
        stats: StatsAggregator,
        heatmap: HeatmapBucketizer,
        console: Console | None = None,
    ):
        self.engine = engine
        self.selection = selection
        self.stats = stats
        self.heatmap = heatmap
        self.console = console or Console()
        self.screen: Screen = "home"
        self.stats_view: StatsView = "weekly"
        self.stats_tags = StatsTagFilter(selection.tags)
        self.input_buffer = ""

    def handle_key(self, key: str) -> bool:
        """
        Apply one keypress.

        Returns False when the user asked to quit.
        """
        if self.screen == "tag_input":
            self._tag_input_key(key)
            return True
        if self.screen == "delete_confirm":
            if key in ("y", "Y"):
                self.selection.delete_selected()
                self.screen = "home"
            elif key in ("n", "N", ESCAPE_KEY):
                self.screen = "home"
            return True

        if key == "q":
            return False

        if self.screen == "home":
            self._home_key(key)
        elif self.screen == "stats":
            if key == "\t":
                self.stats_view = "monthly" if self.stats_view == "weekly" else "weekly"
            elif key == ",":
                self.stats_tags.prev()
            elif key == ".":
                self.stats_tags.next()
            elif key == "h":
                self.screen = "home"
            elif key == "m":
                self.screen = "heatmap"
        elif self.screen == "heatmap":
            if key == "h":
                self.screen = "home"
            elif key == "s":
                self.screen = "stats"
        return True

    def _home_key(self, key: str) -> None:
        engine = self.engine
        actions = {
            " ": engine.toggle,
            "r": engine.reset,
            "t": self.selection.next,
            "\t": self.selection.next,
            "T": self.selection.prev,
            "w": lambda: engine.adjust_work_duration(60),
            "W": lambda: engine.adjust_work_duration(-60),
            "b": lambda: engine.adjust_break_duration(60),
            "B": lambda: engine.adjust_break_duration(-60),
        }
        if key in actions:
            actions[key]()
        elif key in ("+", "n"):
            self.input_buffer = ""
            self.screen = "tag_input"
        elif key == "-":
            if self.selection.tags:
                self.screen = "delete_confirm"
        elif key == "s":
            self.screen = "stats"
        elif key == "m":
            self.screen = "heatmap"

    def _tag_input_key(self, key: str) -> None:
        if key in ENTER_KEYS:
            self.selection.add(self.input_buffer)
            self.input_buffer = ""
            self.screen = "home"
        elif key == ESCAPE_KEY:
            self.input_buffer = ""
            self.screen = "home"
        elif key in BACKSPACE_KEYS:
            self.input_buffer = self.input_buffer[:-1]
        elif key.isprintable():
            self.input_buffer += key

    def _prompt(self) -> RenderableType | None:
        if self.screen == "tag_input":
            return Panel(
                Text(f"{self.input_buffer}_", style="yellow"),
                title=" New Tag ",
                subtitle=Text("[Enter] Save │ [Esc] Cancel"),
                border_style="yellow",
            )
        if self.screen == "delete_confirm":
            return Panel(
                Text(
                    f"Delete tag '{self.selection.selected()}'? (y/n)",
                    style="bold red",
                    justify="center",
                ),
                title=" Confirm ",
                border_style="red",
            )
        return None

    def render(self) -> RenderableType:
        if self.screen == "stats":
            tag = self.stats_tags.current()
            if self.stats_view == "weekly":
                buckets = self.stats.weekly(tag)
            else:
                buckets = self.stats.monthly(tag)
            return render_stats(buckets, self.stats_view, self.stats_tags.label())
        if self.screen == "heatmap":
            return render_heatmap(self.heatmap.weeks())
        return render_home(self.engine.state, self.selection, self._prompt())

    def run(self) -> None:
        """Run until the user quits or presses Ctrl+C."""
        from .keyboard import KeyboardHandler

        keyboard = KeyboardHandler()
        last_tick = time.monotonic()
        try:
            with Live(
                self.render(),
                console=self.console,
                refresh_per_second=10,
                screen=True,
            ) as live:
                while True:
                    key = keyboard.get_key(timeout=POLL_SECONDS)
                    if key is not None and not self.handle_key(key):
                        return

                    if time.monotonic() - last_tick >= TICK_SECONDS:
                        self.engine.tick()
                        last_tick = time.monotonic()

                    live.update(self.render())
        except KeyboardInterrupt:
            return
        finally:
            keyboard.stop()
