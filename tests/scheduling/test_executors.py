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
"""Tests for TaskExecutor port and adapters."""

from __future__ import annotations

import asyncio
import threading
import time

import pytest

from cronjobs.kernel.lifecycle import Lifecycle
from cronjobs.scheduling.adapters.asyncio_executor import AsyncIOTaskExecutor
from cronjobs.scheduling.adapters.thread_executor import ThreadPoolTaskExecutor
from cronjobs.scheduling.ports.outbound import TaskExecutorPort


class TestAsyncIOTaskExecutor:
    @pytest.mark.asyncio
    async def test_submit_runs_coroutine_and_returns_result(self) -> None:
        executor = AsyncIOTaskExecutor()

        async def add(a: int, b: int) -> int:
            return a + b

        task = await executor.submit(add(2, 3))
        assert await task == 5

    @pytest.mark.asyncio
    async def test_submit_tracks_tasks(self) -> None:
        executor = AsyncIOTaskExecutor()
        event = asyncio.Event()

        async def wait_for_event() -> str:
            await event.wait()
            return "done"

        task = await executor.submit(wait_for_event())
        assert task in executor._tasks

        event.set()
        await task
        assert task not in executor._tasks

    @pytest.mark.asyncio
    async def test_submit_sync_runs_off_the_loop_thread(self) -> None:
        executor = AsyncIOTaskExecutor()
        loop_thread = threading.get_ident()

        result = await executor.submit_sync(threading.get_ident)

        assert result != loop_thread

    @pytest.mark.asyncio
    async def test_shutdown_waits_for_all_tasks(self) -> None:
        executor = AsyncIOTaskExecutor()
        results: list[int] = []

        async def append_after_delay(value: int) -> None:
            await asyncio.sleep(0.01)
            results.append(value)

        for value in (1, 2, 3):
            await executor.submit(append_after_delay(value))

        await executor.shutdown(wait=True)
        assert sorted(results) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_shutdown_with_wait_false_cancels_pending_tasks(self) -> None:
        executor = AsyncIOTaskExecutor()
        completed = False

        async def long_running() -> None:
            nonlocal completed
            await asyncio.sleep(10)
            completed = True

        task = await executor.submit(long_running())
        await executor.shutdown(wait=False)

        assert not completed
        assert task.cancelled()
        assert len(executor._tasks) == 0


class TestThreadPoolTaskExecutor:
    @pytest.mark.asyncio
    async def test_submit_runs_coroutine_and_returns_result(self) -> None:
        executor = ThreadPoolTaskExecutor(max_workers=2)

        async def multiply(a: int, b: int) -> int:
            return a * b

        task = await executor.submit(multiply(3, 4))
        assert await task == 12
        await executor.shutdown()

    @pytest.mark.asyncio
    async def test_submit_sync_runs_function_in_thread_pool(self) -> None:
        executor = ThreadPoolTaskExecutor(max_workers=2)

        def blocking_add(a: int, b: int) -> int:
            time.sleep(0.01)
            return a + b

        assert await executor.submit_sync(blocking_add, 5, 7) == 12
        await executor.shutdown()

    @pytest.mark.asyncio
    async def test_single_worker_uses_one_thread(self) -> None:
        executor = ThreadPoolTaskExecutor(max_workers=1, thread_name_prefix="single")

        names = await asyncio.gather(*(executor.submit_sync(lambda: threading.current_thread().name) for _ in range(5)))

        assert len(set(names)) == 1
        assert names[0].startswith("single")
        assert executor.max_workers == 1
        await executor.shutdown()

    @pytest.mark.asyncio
    async def test_shutdown_cleans_up_thread_pool(self) -> None:
        executor = ThreadPoolTaskExecutor(max_workers=2)

        async def simple() -> str:
            return "hello"

        await executor.submit(simple())
        await executor.stop()

        assert len(executor._tasks) == 0
        with pytest.raises(RuntimeError):
            executor._executor.submit(lambda: None)


class TestTaskExecutorPort:
    def test_asyncio_executor_satisfies_protocol(self) -> None:
        executor = AsyncIOTaskExecutor()
        assert isinstance(executor, TaskExecutorPort)
        assert isinstance(executor, Lifecycle)

    def test_thread_pool_executor_satisfies_protocol(self) -> None:
        executor = ThreadPoolTaskExecutor()
        assert isinstance(executor, TaskExecutorPort)
        assert isinstance(executor, Lifecycle)
