"""Tests for wait policies."""

from __future__ import annotations

import pytest

from virtual_player.core.config import AISettings
from virtual_player.engine import pacing
from virtual_player.engine.pacing import NoWait, SleepWait, wait_policy_from_settings


class TestWaitPolicies:
    def test_no_wait_returns_immediately(self) -> None:
        assert NoWait()() is None

    def test_sleep_wait_sleeps(self, monkeypatch: pytest.MonkeyPatch) -> None:
        slept: list[float] = []
        monkeypatch.setattr(pacing.time, "sleep", slept.append)

        SleepWait(0.25)()

        assert slept == [0.25]

    def test_negative_sleep_rejected(self) -> None:
        with pytest.raises(ValueError):
            SleepWait(-1)


class TestWaitPolicyFromSettings:
    def test_zero_delay_means_no_wait(self) -> None:
        assert isinstance(wait_policy_from_settings(AISettings(action_delay_ms=0)), NoWait)

    def test_delay_in_milliseconds(self) -> None:
        wait = wait_policy_from_settings(AISettings(action_delay_ms=250))

        assert isinstance(wait, SleepWait)
        assert wait.seconds == 0.25
