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
"""Cron expression wrapper for next-fire-time calculations.

Two dialects are accepted:

- standard 5-field cron: ``minute hour day month weekday``
- 6-field seconds-first cron: ``second minute hour day month weekday``,
  where ``?`` may stand for "no specific value" in the day fields
  (e.g. ``"0 55 23 * * ?"`` fires daily at 23:55:00)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from croniter import croniter


def _to_croniter_format(expression: str) -> str:
    """Rewrite a seconds-first expression into croniter's seconds-last order."""
    fields = expression.split()
    if len(fields) == 6:
        fields = fields[1:] + fields[:1]
    return " ".join("*" if f == "?" else f for f in fields)


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class CronExpression:
    """Wraps a cron expression string for next-fire-time calculations."""

    expression: str
    _normalized: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        normalized = _to_croniter_format(self.expression)
        if not croniter.is_valid(normalized):
            raise ValueError(f"Invalid cron expression: {self.expression}")
        object.__setattr__(self, "_normalized", normalized)

    def next_fire_time(self, after: datetime | None = None) -> datetime:
        """Return the next fire time after the given datetime (default: local now)."""
        base = after or _now()
        return croniter(self._normalized, base).get_next(datetime)
