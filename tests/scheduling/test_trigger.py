# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for the delay trigger."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from cronjobs.kernel.exceptions import ValidationException
from cronjobs.scheduling.trigger import TriggerContext, delay_trigger

DELAY = timedelta(milliseconds=2000)


class TestDelayTrigger:
    def test_completion_present_adds_delay_exactly(self) -> None:
        t0 = datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)
        trigger = delay_trigger(DELAY)

        assert trigger(TriggerContext(last_completion_time=t0)) == datetime(
            2026, 1, 15, 10, 0, 2, tzinfo=timezone.utc
        )

    def test_completion_absent_uses_clock(self) -> None:
        t1 = datetime(2026, 3, 1, 8, 30, 0, tzinfo=timezone.utc)
        trigger = delay_trigger(DELAY, clock=lambda: t1)

        assert trigger(TriggerContext()) == t1 + DELAY

    def test_completion_absent_is_close_to_now(self) -> None:
        trigger = delay_trigger(DELAY)

        before = datetime.now(timezone.utc)
        result = trigger(TriggerContext())
        after = datetime.now(timezone.utc)

        assert before + DELAY <= result <= after + DELAY

    def test_clock_not_read_when_completion_present(self) -> None:
        def clock() -> datetime:
            raise AssertionError("clock must not be read")

        t0 = datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)
        trigger = delay_trigger(DELAY, clock=clock)

        assert trigger(TriggerContext(last_completion_time=t0)) == t0 + DELAY

    def test_other_context_fields_are_ignored(self) -> None:
        t0 = datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)
        context = TriggerContext(
            last_scheduled_execution_time=t0 - timedelta(hours=1),
            last_actual_execution_time=t0 - timedelta(minutes=30),
            last_completion_time=t0,
        )

        assert delay_trigger(DELAY)(context) == t0 + DELAY

    def test_monotonic_in_completion_time(self) -> None:
        trigger = delay_trigger(DELAY)
        base = datetime(2026, 1, 15, tzinfo=timezone.utc)
        completions = [base + timedelta(milliseconds=ms) for ms in (0, 0, 1, 500, 2000, 2001, 86_400_000)]

        results = [trigger(TriggerContext(last_completion_time=t)) for t in completions]

        assert results == sorted(results)

    def test_same_context_gives_same_answer(self) -> None:
        t0 = datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)
        trigger = delay_trigger(DELAY)
        context = TriggerContext(last_completion_time=t0)

        assert trigger(context) == trigger(context)

    @pytest.mark.parametrize("delay", [timedelta(0), timedelta(milliseconds=-1)])
    def test_non_positive_delay_rejected(self, delay: timedelta) -> None:
        with pytest.raises(ValidationException) as exc_info:
            delay_trigger(delay)
        assert exc_info.value.code == "INVALID_DELAY"


class TestTriggerContext:
    def test_defaults_are_absent(self) -> None:
        context = TriggerContext()
        assert context.last_scheduled_execution_time is None
        assert context.last_actual_execution_time is None
        assert context.last_completion_time is None

    def test_is_immutable(self) -> None:
        context = TriggerContext()
        with pytest.raises(AttributeError):
            context.last_completion_time = datetime.now(timezone.utc)  # type: ignore[misc]
