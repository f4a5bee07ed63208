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
"""Fixed-delay, fixed-rate, async and cron demonstration jobs."""

from __future__ import annotations

import asyncio
import time
from typing import Any

from cronjobs.config.properties.scheduling import SchedulingProperties
from cronjobs.kernel.exceptions import InterruptedWaitException
from cronjobs.scheduling.task_scheduler import TaskScheduler
from cronjobs.service.cron_service import CronService


class CronConfig:
    """Registers the periodic jobs backed by :class:`CronService`."""

    def __init__(self, cron_service: CronService, properties: SchedulingProperties, logger: Any) -> None:
        self._cron_service = cron_service
        self._properties = properties
        self._logger = logger

    def schedule_fixed_delay_task(self) -> str:
        self._logger.info("Fixed delay task", epoch=int(time.time()))
        return self._cron_service.execute_cron_job()

    def schedule_fixed_rate_task(self) -> str:
        self._logger.info("Fixed rate task", epoch=int(time.time()))
        return self._cron_service.execute_cron_job2()

    async def schedule_fixed_rate_task_async(self) -> None:
        """Simulate slow work; the next tick is issued while this one waits."""
        self._logger.info("Fixed rate task async", epoch=int(time.time()))
        try:
            await asyncio.sleep(self._properties.async_work.total_seconds())
        except asyncio.CancelledError as exc:
            raise InterruptedWaitException(
                "Fixed rate task async interrupted while waiting",
                code="INTERRUPTED_WAIT",
                context={"wait_ms": self._properties.async_work_ms},
            ) from exc

    def schedule_task_using_cron_expression(self) -> None:
        self._logger.info("schedule tasks using cron jobs", epoch=int(time.time()))

    def configure_tasks(self, scheduler: TaskScheduler) -> None:
        props = self._properties
        scheduler.register_fixed_delay(
            props.fixed_delay, self.schedule_fixed_delay_task, name="fixed-delay-task"
        )
        scheduler.register_fixed_rate(
            props.fixed_rate, self.schedule_fixed_rate_task, name="fixed-rate-task"
        )
        scheduler.register_fixed_rate(
            props.async_rate,
            self.schedule_fixed_rate_task_async,
            name="fixed-rate-task-async",
            run_async=True,
        )
        scheduler.register_cron(props.cron, self.schedule_task_using_cron_expression, name="cron-task")
