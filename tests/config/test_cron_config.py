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
"""Tests for the demonstration job wiring."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from cronjobs.config.cron_config import CronConfig
from cronjobs.config.dynamic_scheduling_config import DynamicSchedulingConfig
from cronjobs.config.properties.scheduling import SchedulingProperties
from cronjobs.kernel.exceptions import InterruptedWaitException
from cronjobs.scheduling.adapters.thread_executor import ThreadPoolTaskExecutor
from cronjobs.scheduling.execution import JobStatus, ScheduleKind
from cronjobs.scheduling.task_scheduler import TaskScheduler
from cronjobs.scheduling.trigger import TriggerContext
from cronjobs.service.cron_service import CRON_JOB_1, CRON_JOB_2, CronService


def _cron_config(**overrides: object) -> tuple[CronConfig, MagicMock]:
    logger = MagicMock()
    config = CronConfig(CronService(MagicMock()), SchedulingProperties(**overrides), logger)  # type: ignore[arg-type]
    return config, logger


class TestCronConfigJobs:
    def test_fixed_delay_task_runs_job_1(self) -> None:
        config, logger = _cron_config()
        assert config.schedule_fixed_delay_task() == CRON_JOB_1
        assert logger.info.call_args.args == ("Fixed delay task",)
        assert isinstance(logger.info.call_args.kwargs["epoch"], int)

    def test_fixed_rate_task_runs_job_2(self) -> None:
        config, logger = _cron_config()
        assert config.schedule_fixed_rate_task() == CRON_JOB_2
        assert logger.info.call_args.args == ("Fixed rate task",)

    def test_cron_task_only_logs(self) -> None:
        config, logger = _cron_config()
        assert config.schedule_task_using_cron_expression() is None
        assert logger.info.call_args.args == ("schedule tasks using cron jobs",)

    @pytest.mark.asyncio
    async def test_async_task_waits_configured_duration(self) -> None:
        config, logger = _cron_config(async_work_ms=30)
        loop = asyncio.get_running_loop()

        started = loop.time()
        await config.schedule_fixed_rate_task_async()

        assert loop.time() - started >= 0.025
        assert logger.info.call_args.args == ("Fixed rate task async",)

    @pytest.mark.asyncio
    async def test_async_task_interrupted_mid_wait(self) -> None:
        config, _ = _cron_config(async_work_ms=10_000)

        task = asyncio.create_task(config.schedule_fixed_rate_task_async())
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(InterruptedWaitException) as exc_info:
            await task
        assert exc_info.value.code == "INTERRUPTED_WAIT"
        assert isinstance(exc_info.value.__cause__, asyncio.CancelledError)


class TestCronConfigRegistration:
    def test_registers_four_jobs_with_configured_timings(self) -> None:
        config, _ = _cron_config()
        scheduler = TaskScheduler(logger=MagicMock())
        config.configure_tasks(scheduler)

        tasks = {task.name: task for task in scheduler.registrations}
        assert set(tasks) == {"fixed-delay-task", "fixed-rate-task", "fixed-rate-task-async", "cron-task"}

        assert tasks["fixed-delay-task"].kind is ScheduleKind.FIXED_DELAY
        assert tasks["fixed-delay-task"].interval == timedelta(milliseconds=2000)

        assert tasks["fixed-rate-task"].kind is ScheduleKind.FIXED_RATE
        assert tasks["fixed-rate-task"].interval == timedelta(milliseconds=2000)
        assert tasks["fixed-rate-task"].run_async is False

        assert tasks["fixed-rate-task-async"].interval == timedelta(milliseconds=1000)
        assert tasks["fixed-rate-task-async"].run_async is True

        assert tasks["cron-task"].kind is ScheduleKind.CRON
        assert tasks["cron-task"].cron is not None
        assert tasks["cron-task"].cron.next_fire_time(datetime(2026, 1, 15, 12, 0)) == datetime(2026, 1, 15, 23, 55)

    @pytest.mark.asyncio
    async def test_scheduler_interrupts_async_job_on_shutdown(self) -> None:
        config, _ = _cron_config(async_rate_ms=20, async_work_ms=10_000, fixed_delay_ms=20, fixed_rate_ms=20)
        scheduler = TaskScheduler(logger=MagicMock())
        config.configure_tasks(scheduler)

        await scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.stop(wait=False)

        execution = scheduler.last_execution("fixed-rate-task-async")
        assert execution is not None
        assert execution.status is JobStatus.INTERRUPTED
        assert scheduler.last_execution("fixed-delay-task").result == CRON_JOB_1  # type: ignore[union-attr]
        assert scheduler.last_execution("fixed-rate-task").result == CRON_JOB_2  # type: ignore[union-attr]


class TestDynamicSchedulingConfig:
    def test_task_executor_is_single_threaded_and_reused(self) -> None:
        config = DynamicSchedulingConfig(CronService(MagicMock()))
        executor = config.task_executor()
        assert isinstance(executor, ThreadPoolTaskExecutor)
        assert executor.max_workers == 1
        assert config.task_executor() is executor

    def test_trigger_uses_service_delay(self) -> None:
        now = datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc)
        service = CronService(MagicMock(), delay=timedelta(milliseconds=2000))
        trigger = DynamicSchedulingConfig(service, clock=lambda: now).trigger()

        assert trigger(TriggerContext()) == now + timedelta(milliseconds=2000)
        t0 = datetime(2026, 1, 15, 9, 0, tzinfo=timezone.utc)
        assert trigger(TriggerContext(last_completion_time=t0)) == t0 + timedelta(milliseconds=2000)

    def test_registers_dynamic_trigger_on_own_executor(self) -> None:
        service = CronService(MagicMock())
        config = DynamicSchedulingConfig(service)
        scheduler = TaskScheduler(logger=MagicMock())
        config.configure_tasks(scheduler)

        (task,) = scheduler.registrations
        assert task.name == "dynamic-trigger-task"
        assert task.kind is ScheduleKind.TRIGGER
        assert task.executor is config.task_executor()
        assert task.job() == CRON_JOB_1

    @pytest.mark.asyncio
    async def test_runs_job_1_repeatedly(self) -> None:
        logger = MagicMock()
        service = CronService(logger, delay=timedelta(milliseconds=20))
        scheduler = TaskScheduler(logger=MagicMock())
        DynamicSchedulingConfig(service).configure_tasks(scheduler)

        await scheduler.start()
        await asyncio.sleep(0.15)
        await scheduler.stop()

        assert logger.info.call_count >= 2
        assert {c.args for c in logger.info.call_args_list} == {(CRON_JOB_1,)}
