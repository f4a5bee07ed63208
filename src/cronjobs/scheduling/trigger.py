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
"""Dynamic triggers — next execution time computed from the previous run."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from cronjobs.kernel.exceptions import ValidationException

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TriggerContext:
    """Timing of the previous run on a trigger's timeline.

    The scheduler builds a fresh context for every query; all fields are
    ``None`` before the first run.
    """

    last_scheduled_execution_time: datetime | None = None
    last_actual_execution_time: datetime | None = None
    last_completion_time: datetime | None = None


Trigger = Callable[[TriggerContext], datetime | None]
"""Returns the next execution instant, or ``None`` to end the timeline."""


def delay_trigger(delay: timedelta, clock: Clock | None = None) -> Trigger:
    """Build a trigger firing *delay* after the previous run completed.

    The first query (no completion recorded yet) fires *delay* after the
    current time read from *clock*.
    """
    if delay <= timedelta(0):
        raise ValidationException(
            f"Trigger delay must be positive, got {delay}",
            code="INVALID_DELAY",
            context={"delay": delay},
        )
    now = clock or utc_now

    def next_execution_time(context: TriggerContext) -> datetime:
        baseline = context.last_completion_time
        if baseline is None:
            baseline = now()
        return baseline + delay

    return next_execution_time
