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
"""Thread pool task executor adapter."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Coroutine, TypeVar

T = TypeVar("T")


class ThreadPoolTaskExecutor:
    """TaskExecutor backed by a fixed-size ThreadPoolExecutor.

    Synchronous jobs run on the pool's threads, while async coroutines
    are submitted to the event loop directly. With ``max_workers=1`` every
    synchronous job on this executor runs on one dedicated thread.
    """

    def __init__(self, max_workers: int = 4, thread_name_prefix: str = "cronjobs") -> None:
        self._max_workers = max_workers
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=thread_name_prefix)
        self._tasks: set[asyncio.Future[Any]] = set()

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def _track(self, future: asyncio.Future[T]) -> asyncio.Future[T]:
        self._tasks.add(future)
        future.add_done_callback(self._tasks.discard)
        return future

    async def submit(self, coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
        """Submit a coroutine for execution. Returns an asyncio.Task."""
        task = asyncio.create_task(coro)
        self._track(task)
        return task

    def submit_sync(self, func: Callable[..., T], *args: Any) -> asyncio.Future[T]:
        """Submit a synchronous function to the thread pool."""
        loop = asyncio.get_running_loop()
        return self._track(loop.run_in_executor(self._executor, func, *args))

    async def start(self) -> None:
        """No-op -- the pool spawns threads on demand."""

    async def stop(self) -> None:
        await self.shutdown(wait=True)

    async def shutdown(self, wait: bool = True) -> None:
        """Shutdown the executor, optionally waiting for pending tasks.

        Work already running on a pool thread cannot be interrupted; without
        *wait* only coroutines and queued work are cancelled.
        """
        if not wait:
            for task in self._tasks:
                task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
        self._executor.shutdown(wait=wait, cancel_futures=not wait)
