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
"""Scheduling configuration properties."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from cronjobs.core.config import config_properties


@config_properties(prefix="cronjobs.scheduling")
@dataclass
class SchedulingProperties:
    """Timings of the demonstration jobs (cronjobs.scheduling.*)."""

    delay_ms: int = 2000
    fixed_delay_ms: int = 2000
    fixed_rate_ms: int = 2000
    async_rate_ms: int = 1000
    async_work_ms: int = 2000
    cron: str = "0 55 23 * * ?"
    pool_size: int = 4

    @property
    def delay(self) -> timedelta:
        return timedelta(milliseconds=self.delay_ms)

    @property
    def fixed_delay(self) -> timedelta:
        return timedelta(milliseconds=self.fixed_delay_ms)

    @property
    def fixed_rate(self) -> timedelta:
        return timedelta(milliseconds=self.fixed_rate_ms)

    @property
    def async_rate(self) -> timedelta:
        return timedelta(milliseconds=self.async_rate_ms)

    @property
    def async_work(self) -> timedelta:
        return timedelta(milliseconds=self.async_work_ms)
