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
"""Dynamic scheduling — next run computed from the previous run's completion."""

from __future__ import annotations

from cronjobs.scheduling.adapters.thread_executor import ThreadPoolTaskExecutor
from cronjobs.scheduling.task_scheduler import TaskScheduler
from cronjobs.scheduling.trigger import Clock, Trigger, delay_trigger
from cronjobs.service.cron_service import CronService


class DynamicSchedulingConfig:
    """Registers job 1 on a delay trigger with its own single-thread executor."""

    def __init__(self, cron_service: CronService, clock: Clock | None = None) -> None:
        self._cron_service = cron_service
        self._clock = clock
        self._executor: ThreadPoolTaskExecutor | None = None

    def task_executor(self) -> ThreadPoolTaskExecutor:
        if self._executor is None:
            self._executor = ThreadPoolTaskExecutor(max_workers=1, thread_name_prefix="cronjobs-dynamic")
        return self._executor

    def trigger(self) -> Trigger:
        return delay_trigger(self._cron_service.get_delay(), clock=self._clock)

    def configure_tasks(self, scheduler: TaskScheduler) -> None:
        scheduler.register_dynamic_trigger(
            self.trigger(),
            self._cron_service.execute_cron_job,
            name="dynamic-trigger-task",
            executor=self.task_executor(),
        )
