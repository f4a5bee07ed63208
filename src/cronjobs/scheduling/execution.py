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
"""Registration and outcome records for scheduled jobs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cronjobs.scheduling.cron import CronExpression
    from cronjobs.scheduling.ports.outbound import TaskExecutorPort
    from cronjobs.scheduling.trigger import Trigger


class ScheduleKind(str, Enum):
    FIXED_DELAY = "fixed_delay"
    FIXED_RATE = "fixed_rate"
    CRON = "cron"
    TRIGGER = "trigger"


class JobStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    INTERRUPTED = "interrupted"


@dataclass(frozen=True)
class ScheduledTask:
    """One timer line registered with the TaskScheduler."""

    name: str
    job: Callable[[], Any]
    kind: ScheduleKind
    interval: timedelta | None = None
    cron: CronExpression | None = None
    trigger: Trigger | None = None
    initial_delay: timedelta | None = None
    run_async: bool = False
    executor: TaskExecutorPort | None = None


@dataclass(frozen=True)
class JobExecution:
    """Outcome of a single job invocation."""

    name: str
    status: JobStatus
    started_at: datetime
    finished_at: datetime
    result: Any = None
    error: BaseException | None = None

    @property
    def duration(self) -> timedelta:
        return self.finished_at - self.started_at
