"""Fire-and-forget sound and desktop notifications on mode changes."""

from __future__ import annotations

import shutil
import subprocess
import threading
from pathlib import Path

from pomodoro_cli.utils.logger import get_logger

APP_TITLE = "Pomodoro++"

MESSAGES = {
    "work": "Work session complete! Time for a break.",
    "break": "Break is over! Back to work.",
}

SOUND_PLAYERS = ("paplay", "aplay", "afplay")


def _spawn(args: list[str]) -> None:
    """Start a detached process; never raises."""
    try:
        subprocess.Popen(
            args,
            start_new_session=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
        )
    except OSError:
        get_logger("notify").debug("Could not run %s", args[0], exc_info=True)


def dispatch(args: list[str]) -> threading.Thread:
    """Run ``args`` on a daemon thread. No result, no join."""
    thread = threading.Thread(target=_spawn, args=(args,), daemon=True)
    thread.start()
    return thread


class Notifier:
    """Plays a sound and shows a desktop notification when an interval ends."""

    def __init__(
        self,
        sound: bool = True,
        desktop: bool = True,
        sound_file: str | None = None,
        title: str = APP_TITLE,
    ):
        self.sound = sound
        self.desktop = desktop
        self.sound_file = sound_file
        self.title = title

    @classmethod
    def from_config(cls, config) -> "Notifier":
        """Build from a NotificationConfig."""
        return cls(
            sound=config.sound,
            desktop=config.desktop,
            sound_file=config.sound_file,
            title=config.title,
        )

    def sound_command(self) -> list[str] | None:
        if not self.sound or not self.sound_file:
            return None
        if not Path(self.sound_file).expanduser().exists():
            return None
        for player in SOUND_PLAYERS:
            if shutil.which(player):
                return [player, str(Path(self.sound_file).expanduser())]
        return None

    def desktop_command(self, finished_mode: str) -> list[str] | None:
        if not self.desktop or not shutil.which("notify-send"):
            return None
        return ["notify-send", self.title, MESSAGES[finished_mode]]

    def __call__(self, finished_mode: str) -> None:
        """Notify that ``finished_mode`` just completed."""
        for args in (self.sound_command(), self.desktop_command(finished_mode)):
            if args:
                dispatch(args)
