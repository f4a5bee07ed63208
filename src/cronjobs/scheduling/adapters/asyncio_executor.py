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
"""AsyncIO task executor adapter."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Coroutine, TypeVar

T = TypeVar("T")


class AsyncIOTaskExecutor:
    """Default TaskExecutor using asyncio.create_task.

    Synchronous callables go to the event loop's default thread pool.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Future[Any]] = set()

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
        loop = asyncio.get_running_loop()
        return self._track(loop.run_in_executor(None, func, *args))

    async def start(self) -> None:
        """No-op -- asyncio executor is ready after construction."""

    async def stop(self) -> None:
        await self.shutdown(wait=True)

    async def shutdown(self, wait: bool = True) -> None:
        """Shutdown the executor, cancelling pending coroutines unless *wait*."""
        if not wait:
            for task in self._tasks:
                task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
