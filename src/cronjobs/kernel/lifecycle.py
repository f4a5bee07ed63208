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
"""Unified lifecycle protocol for components that own workers or timers.

Every TaskExecutorPort is a Lifecycle: the scheduler calls start() on each
executor before its first tick and shuts them down when it stops.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Lifecycle(Protocol):
    """Standard lifecycle for executors and the task scheduler."""

    async def start(self) -> None:
        """Acquire workers and begin issuing work."""
        ...

    async def stop(self) -> None:
        """Stop issuing work and release workers.

        Best-effort: exceptions are logged but do not prevent shutdown of
        the remaining components.
        """
        ...
