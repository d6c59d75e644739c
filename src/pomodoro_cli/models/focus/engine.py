"""Work/break countdown engine."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta

from pomodoro_cli.repositories.repository import FocusRepository
from pomodoro_cli.utils.logger import get_logger

from .history import SessionRecord
from .recorder import SessionRecorder
from .state import TimerMode, TimerState, clamp_duration, opposite, parse_duration
from .tags import FALLBACK_TAG

Clock = Callable[[], datetime]
Notifier = Callable[[TimerMode], None]

CONFIG_KEYS: dict[TimerMode, str] = {
    "work": "work_duration",
    "break": "break_duration",
}


class TimerEngine:
    """
    Owns the countdown state and drives session completion.

    Everything runs on the caller's thread: a driving loop calls ``tick()``
    once per elapsed second, and ``tick()`` is the only operation that can
    complete a session and write history.
    """

    def __init__(
        self,
        store: FocusRepository,
        recorder: SessionRecorder | None = None,
        clock: Clock | None = None,
        notifier: Notifier | None = None,
    ):
        self.store = store
        self.recorder = recorder or SessionRecorder(store)
        self.clock: Clock = clock or datetime.now
        self.notifier = notifier

        work = parse_duration(store.get_config(CONFIG_KEYS["work"], "1500"), "work")
        rest = parse_duration(store.get_config(CONFIG_KEYS["break"], "300"), "break")
        self._state = TimerState(
            mode="work",
            running=False,
            remaining_seconds=work,
            work_duration=work,
            break_duration=rest,
        )

    @property
    def state(self) -> TimerState:
        """Copy of the current state for display."""
        return replace(self._state)

    @property
    def mode(self) -> TimerMode:
        return self._state.mode

    @property
    def running(self) -> bool:
        return self._state.running

    @property
    def remaining_seconds(self) -> int:
        return self._state.remaining_seconds

    @property
    def session_start(self) -> datetime | None:
        return self._state.session_start

    @property
    def work_duration(self) -> int:
        return self._state.work_duration

    @property
    def break_duration(self) -> int:
        return self._state.break_duration

    def toggle(self) -> None:
        """Pause if running, otherwise start (opening a session if none is open)."""
        state = self._state
        if state.running:
            state.running = False
            return

        state.running = True
        if state.session_start is None:
            state.session_start = self.clock()

    def reset(self) -> None:
        """Abandon the current interval without recording it."""
        state = self._state
        state.running = False
        state.session_start = None
        state.remaining_seconds = state.duration_for()

    def tick(self) -> SessionRecord | None:
        """
        Advance the countdown by one second.

        Returns the recorded session when this tick completed an interval.
        """
        state = self._state
        if not state.running or state.remaining_seconds <= 0:
            return None

        state.remaining_seconds -= 1
        if state.remaining_seconds == 0:
            return self._complete()
        return None

    def set_work_duration(self, seconds: int) -> int:
        return self._set_duration("work", seconds)

    def set_break_duration(self, seconds: int) -> int:
        return self._set_duration("break", seconds)

    def adjust_work_duration(self, delta: int) -> int:
        return self.set_work_duration(self._state.work_duration + delta)

    def adjust_break_duration(self, delta: int) -> int:
        return self.set_break_duration(self._state.break_duration + delta)

    def _set_duration(self, mode: TimerMode, seconds: int) -> int:
        state = self._state
        value = clamp_duration(mode, seconds)
        if mode == "work":
            state.work_duration = value
        else:
            state.break_duration = value

        try:
            self.store.set_config(CONFIG_KEYS[mode], str(value))
        except Exception:
            get_logger("engine").warning(
                "Could not save %s duration", mode, exc_info=True
            )

        # A running interval keeps its length until the next reset/completion.
        if state.mode == mode and not state.running:
            state.remaining_seconds = value
        return value

    def _complete(self) -> SessionRecord | None:
        state = self._state
        finished = state.mode
        record = None

        if state.session_start is not None:
            start = state.session_start
            end = self.clock()
            if end <= start:
                end = start + timedelta(seconds=1)
            try:
                tag = self.store.current_tag_name() or FALLBACK_TAG
            except Exception:
                get_logger("engine").warning("Could not read tag", exc_info=True)
                tag = FALLBACK_TAG
            record = self.recorder.record(
                start, end, state.duration_for(finished), tag, finished
            )

        self._notify(finished)

        state.mode = opposite(finished)
        state.remaining_seconds = state.duration_for()
        state.running = False
        state.session_start = None

        get_logger("engine").info("%s interval complete, now %s", finished, state.mode)
        return record

    def _notify(self, finished: TimerMode) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier(finished)
        except Exception:
            get_logger("engine").debug("Notification failed", exc_info=True)
