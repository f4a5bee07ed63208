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
"""Task scheduler engine — explicit timer registrations and their execution loops."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from datetime import timedelta
from typing import Any

import structlog

from cronjobs.kernel.exceptions import InterruptedWaitException, ValidationException
from cronjobs.scheduling.adapters.asyncio_executor import AsyncIOTaskExecutor
from cronjobs.scheduling.cron import CronExpression
from cronjobs.scheduling.execution import JobExecution, JobStatus, ScheduledTask, ScheduleKind
from cronjobs.scheduling.ports.outbound import TaskExecutorPort
from cronjobs.scheduling.trigger import Clock, Trigger, TriggerContext, utc_now


class TaskScheduler:
    """Runs registered jobs on independent timer lines.

    Every registration becomes one asyncio task (its timer line). Job
    invocations are handed to an executor; a failing invocation is recorded
    and logged and never ends its line.

    Usage::

        scheduler = TaskScheduler(logger=logger)
        scheduler.register_fixed_delay(timedelta(seconds=2), service.execute_cron_job)
        scheduler.register_cron("0 55 23 * * ?", nightly)
        await scheduler.start()
        # ... application runs ...
        await scheduler.stop()
    """

    def __init__(
        self,
        executor: TaskExecutorPort | None = None,
        logger: Any = None,
        clock: Clock | None = None,
    ) -> None:
        self._executor: TaskExecutorPort = executor or AsyncIOTaskExecutor()
        self._logger = logger or structlog.get_logger(__name__)
        self._clock: Clock = clock or utc_now
        self._running: bool = False
        self._tasks: list[ScheduledTask] = []
        self._loop_tasks: list[asyncio.Task[Any]] = []
        self._last_executions: dict[str, JobExecution] = {}

    @property
    def running(self) -> bool:
        return self._running

    @property
    def registrations(self) -> list[ScheduledTask]:
        return list(self._tasks)

    def last_execution(self, name: str) -> JobExecution | None:
        """Most recent outcome recorded for the named task, if it has run."""
        return self._last_executions.get(name)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_fixed_delay(
        self,
        interval: timedelta,
        job: Callable[[], Any],
        *,
        name: str | None = None,
        initial_delay: timedelta | None = None,
        executor: TaskExecutorPort | None = None,
    ) -> ScheduledTask:
        """Run *job*, wait for it to complete, wait *interval*, repeat."""
        self._check_interval("interval", interval)
        return self._register(
            ScheduledTask(
                name=name or self._default_name(job),
                job=job,
                kind=ScheduleKind.FIXED_DELAY,
                interval=interval,
                initial_delay=initial_delay,
                executor=executor,
            )
        )

    def register_fixed_rate(
        self,
        interval: timedelta,
        job: Callable[[], Any],
        *,
        name: str | None = None,
        initial_delay: timedelta | None = None,
        run_async: bool = False,
        executor: TaskExecutorPort | None = None,
    ) -> ScheduledTask:
        """Start *job* every *interval*, measured from the previous start.

        With ``run_async`` each run is dispatched without waiting for the
        previous one, so runs that outlast the period overlap. Otherwise a
        late run delays the next start until it completes.
        """
        self._check_interval("interval", interval)
        return self._register(
            ScheduledTask(
                name=name or self._default_name(job),
                job=job,
                kind=ScheduleKind.FIXED_RATE,
                interval=interval,
                initial_delay=initial_delay,
                run_async=run_async,
                executor=executor,
            )
        )

    def register_cron(
        self,
        expression: str | CronExpression,
        job: Callable[[], Any],
        *,
        name: str | None = None,
        executor: TaskExecutorPort | None = None,
    ) -> ScheduledTask:
        """Run *job* at every fire time of a cron expression (local time)."""
        if isinstance(expression, str):
            try:
                expression = CronExpression(expression)
            except ValueError as exc:
                raise ValidationException(str(exc), code="INVALID_CRON", context={"expression": expression}) from exc
        return self._register(
            ScheduledTask(
                name=name or self._default_name(job),
                job=job,
                kind=ScheduleKind.CRON,
                cron=expression,
                executor=executor,
            )
        )

    def register_dynamic_trigger(
        self,
        trigger: Trigger,
        job: Callable[[], Any],
        *,
        name: str | None = None,
        executor: TaskExecutorPort | None = None,
    ) -> ScheduledTask:
        """Run *job* at the instants computed by *trigger*.

        The trigger is queried with a fresh :class:`TriggerContext` before
        each run; runs on this line never overlap.
        """
        return self._register(
            ScheduledTask(
                name=name or self._default_name(job),
                job=job,
                kind=ScheduleKind.TRIGGER,
                trigger=trigger,
                executor=executor,
            )
        )

    def _register(self, task: ScheduledTask) -> ScheduledTask:
        if self._running:
            raise ValidationException(
                f"Cannot register '{task.name}' while the scheduler is running",
                code="SCHEDULER_RUNNING",
                context={"task": task.name},
            )
        if any(existing.name == task.name for existing in self._tasks):
            raise ValidationException(
                f"A task named '{task.name}' is already registered",
                code="DUPLICATE_TASK",
                context={"task": task.name},
            )
        self._tasks.append(task)
        self._logger.debug("task_registered", task=task.name, kind=task.kind.value)
        return task

    @staticmethod
    def _check_interval(label: str, interval: timedelta) -> None:
        if interval <= timedelta(0):
            raise ValidationException(
                f"Schedule {label} must be positive, got {interval}",
                code="INVALID_INTERVAL",
                context={label: interval},
            )

    @staticmethod
    def _default_name(job: Callable[[], Any]) -> str:
        return getattr(job, "__qualname__", None) or getattr(job, "__name__", None) or repr(job)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Start one timer line per registration."""
        if self._running:
            return
        self._running = True
        for executor in self._executors():
            await executor.start()

        loops = {
            ScheduleKind.FIXED_DELAY: self._run_fixed_delay_loop,
            ScheduleKind.FIXED_RATE: self._run_fixed_rate_loop,
            ScheduleKind.CRON: self._run_cron_loop,
            ScheduleKind.TRIGGER: self._run_trigger_loop,
        }
        for task in self._tasks:
            loop_task = asyncio.create_task(loops[task.kind](task), name=f"cronjobs:{task.name}")
            loop_task.add_done_callback(self._loop_done_callback)
            self._loop_tasks.append(loop_task)
        self._logger.info("scheduler_started", tasks=len(self._tasks))

    async def stop(self, wait: bool = True) -> None:
        """Stop issuing ticks and shut the executors down.

        With *wait* in-flight runs complete first; otherwise in-flight
        coroutine runs are cancelled and record an interrupted outcome.
        """
        self._running = False

        for loop_task in self._loop_tasks:
            loop_task.cancel()
        if self._loop_tasks:
            await asyncio.gather(*self._loop_tasks, return_exceptions=True)
        self._loop_tasks.clear()

        for executor in self._executors():
            await executor.shutdown(wait=wait)
        self._logger.info("scheduler_stopped", wait=wait)

    def _executors(self) -> list[TaskExecutorPort]:
        executors: list[TaskExecutorPort] = [self._executor]
        for task in self._tasks:
            if task.executor is not None and all(task.executor is not e for e in executors):
                executors.append(task.executor)
        return executors

    def _loop_done_callback(self, loop_task: asyncio.Task[Any]) -> None:
        if not loop_task.cancelled():
            exc = loop_task.exception()
            if exc is not None:
                self._logger.error("scheduling_loop_failed", loop=loop_task.get_name(), exc_info=exc)

    # ------------------------------------------------------------------
    # Timer lines
    # ------------------------------------------------------------------

    async def _run_fixed_delay_loop(self, task: ScheduledTask) -> None:
        assert task.interval is not None
        if task.initial_delay:
            await asyncio.sleep(task.initial_delay.total_seconds())
        while self._running:
            run = await self._submit(task)
            await asyncio.shield(run)
            if not self._running:
                break
            await asyncio.sleep(task.interval.total_seconds())

    async def _run_fixed_rate_loop(self, task: ScheduledTask) -> None:
        assert task.interval is not None
        loop = asyncio.get_running_loop()
        period = task.interval.total_seconds()
        if task.initial_delay:
            await asyncio.sleep(task.initial_delay.total_seconds())
        next_start = loop.time()
        while self._running:
            run = await self._submit(task)
            if not task.run_async:
                await asyncio.shield(run)
            # A run that outlasted its period starts the next one right away.
            next_start = max(next_start + period, loop.time())
            await asyncio.sleep(next_start - loop.time())

    async def _run_cron_loop(self, task: ScheduledTask) -> None:
        assert task.cron is not None
        last_fire = None
        while self._running:
            now = self._clock().astimezone()
            base = now if last_fire is None or now > last_fire else last_fire
            fire_at = task.cron.next_fire_time(base)
            await asyncio.sleep(max(0.0, (fire_at - now).total_seconds()))
            if not self._running:
                break
            last_fire = fire_at
            await self._submit(task)

    async def _run_trigger_loop(self, task: ScheduledTask) -> None:
        assert task.trigger is not None
        context = TriggerContext()
        while self._running:
            scheduled_at = task.trigger(context)
            if scheduled_at is None:
                self._logger.info("trigger_exhausted", task=task.name)
                break
            await asyncio.sleep(max(0.0, (scheduled_at - self._clock()).total_seconds()))
            if not self._running:
                break
            actual = self._clock()
            run = await self._submit(task)
            execution = await asyncio.shield(run)
            context = TriggerContext(
                last_scheduled_execution_time=scheduled_at,
                last_actual_execution_time=actual,
                last_completion_time=execution.finished_at,
            )

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    async def _submit(self, task: ScheduledTask) -> asyncio.Task[JobExecution]:
        executor = task.executor or self._executor
        return await executor.submit(self._invoke(task))

    async def _invoke(self, task: ScheduledTask) -> JobExecution:
        """Run one invocation and record its outcome; never raises job errors."""
        executor = task.executor or self._executor
        started_at = self._clock()
        try:
            if inspect.iscoroutinefunction(task.job):
                result = await task.job()
            else:
                result = await executor.submit_sync(task.job)
                if inspect.isawaitable(result):
                    # Closures returning a coroutine run on the loop.
                    result = await result
        except InterruptedWaitException as exc:
            execution = JobExecution(task.name, JobStatus.INTERRUPTED, started_at, self._clock(), error=exc)
            self._logger.warning("job_interrupted", task=task.name, reason=str(exc))
        except Exception as exc:  # noqa: BLE001
            execution = JobExecution(task.name, JobStatus.FAILED, started_at, self._clock(), error=exc)
            self._logger.error("job_failed", task=task.name, exc_info=exc)
        else:
            execution = JobExecution(task.name, JobStatus.COMPLETED, started_at, self._clock(), result=result)
            self._logger.debug(
                "job_completed",
                task=task.name,
                duration_ms=round(execution.duration.total_seconds() * 1000, 3),
            )
        self._last_executions[task.name] = execution
        return execution
