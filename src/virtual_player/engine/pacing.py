"""Pacing between actions.

The game engine may apply side effects asynchronously, so the executor
pauses briefly between actions. The pause is a hint, never a
synchronization primitive, and can be disabled entirely.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Protocol


if TYPE_CHECKING:
    from virtual_player.core.config import AISettings


class WaitPolicy(Protocol):
    """Callable invoked between two actions of a turn."""

    def __call__(self) -> None: ...


class NoWait:
    """Continue immediately."""

    def __call__(self) -> None:
        return None

    def __repr__(self) -> str:
        return "NoWait()"


class SleepWait:
    """Block the calling thread for a fixed time."""

    def __init__(self, seconds: float) -> None:
        if seconds < 0:
            msg = f"seconds must be non-negative, got {seconds}"
            raise ValueError(msg)
        self.seconds = seconds

    def __call__(self) -> None:
        time.sleep(self.seconds)

    def __repr__(self) -> str:
        return f"SleepWait(seconds={self.seconds})"


def wait_policy_from_settings(settings: AISettings) -> WaitPolicy:
    """Build the wait policy configured by ``action_delay_ms``."""
    if settings.action_delay_ms == 0:
        return NoWait()
    return SleepWait(settings.action_delay_ms / 1000)


__all__ = [
    "WaitPolicy",
    "NoWait",
    "SleepWait",
    "wait_policy_from_settings",
]
