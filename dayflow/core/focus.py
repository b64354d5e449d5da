"""
Pomodoro-style focus timer

Work sessions of 25 minutes alternate with 5 minute breaks; every fourth
finished work session is followed by a 15 minute break instead.
"""

from enum import Enum
from typing import Callable, Dict, Optional

from dayflow.core.logger import get_logger

logger = get_logger(__name__)


class TimerMode(str, Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


MODE_MINUTES: Dict[TimerMode, int] = {
    TimerMode.WORK: 25,
    TimerMode.SHORT_BREAK: 5,
    TimerMode.LONG_BREAK: 15,
}

CYCLES_PER_LONG_BREAK = 4


class FocusTimer:
    """Countdown state for one focus session

    The timer does not own a clock; callers drive it with tick().
    `on_finish` is called with the mode that just ended.
    """

    def __init__(
        self,
        on_finish: Optional[Callable[[TimerMode], None]] = None,
        current_task_id: Optional[str] = None,
    ):
        self.mode = TimerMode.WORK
        self.remaining = self.duration(self.mode)
        self.running = False
        self.cycles = 0
        self.current_task_id = current_task_id
        self._on_finish = on_finish

    @staticmethod
    def duration(mode: TimerMode) -> int:
        """Length of a mode in seconds"""
        return MODE_MINUTES[mode] * 60

    @property
    def progress(self) -> float:
        total = self.duration(self.mode)
        return (total - self.remaining) / total

    def start(self) -> None:
        self.running = True

    def pause(self) -> None:
        self.running = False

    def reset(self) -> None:
        """Stop and rewind the current mode"""
        self.running = False
        self.remaining = self.duration(self.mode)

    def switch_mode(self, mode: TimerMode) -> None:
        """Select a mode manually; only allowed while stopped"""
        if self.running:
            return
        self._enter(TimerMode(mode))

    def tick(self, seconds: int = 1) -> None:
        """Advance a running timer; finishing a mode moves to the next one"""
        if not self.running or seconds <= 0:
            return
        self.remaining = max(0, self.remaining - seconds)
        if self.remaining == 0:
            self._finish()

    def _finish(self) -> None:
        finished = self.mode
        if finished == TimerMode.WORK:
            self.cycles += 1
            if self.cycles % CYCLES_PER_LONG_BREAK == 0:
                next_mode = TimerMode.LONG_BREAK
            else:
                next_mode = TimerMode.SHORT_BREAK
        else:
            next_mode = TimerMode.WORK

        logger.debug(f"Focus timer finished {finished.value}, next: {next_mode.value}")
        self._enter(next_mode)
        if self._on_finish is not None:
            self._on_finish(finished)

    def _enter(self, mode: TimerMode) -> None:
        self.mode = mode
        self.remaining = self.duration(mode)
        self.running = False
