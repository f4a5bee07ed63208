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
"""Task executor port — abstract interface for the workers that run jobs."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any, Protocol, TypeVar, runtime_checkable

from cronjobs.kernel.lifecycle import Lifecycle

T = TypeVar("T")


@runtime_checkable
class TaskExecutorPort(Lifecycle, Protocol):
    """Port for executing job invocations off the scheduler's timer lines."""

    async def submit(self, coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
        """Submit a coroutine for execution. Returns an asyncio.Task."""
        ...

    def submit_sync(self, func: Callable[..., T], *args: Any) -> asyncio.Future[T]:
        """Run a synchronous callable on a worker thread."""
        ...

    async def shutdown(self, wait: bool = True) -> None:
        """Stop the executor; cancel in-flight coroutines unless *wait*."""
        ...
