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
"""CronService — the job bodies run by the scheduler."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from cronjobs.kernel.exceptions import JobNotFoundException

CRON_JOB_1 = "Cron Job Executed Successfully!!!"

CRON_JOB_2 = "Cron Job 2 Executed Successfully!!!"

DEFAULT_DELAY = timedelta(milliseconds=2000)


class CronService:
    """Logs and returns a fixed message per job.

    Holds no mutable state, so concurrent invocations need no locking.
    """

    def __init__(self, logger: Any, delay: timedelta = DEFAULT_DELAY) -> None:
        self._logger = logger
        self._delay = delay
        self._jobs = {
            "1": self.execute_cron_job,
            "2": self.execute_cron_job2,
        }

    def execute_cron_job(self) -> str:
        self._logger.info(CRON_JOB_1)
        return CRON_JOB_1

    def execute_cron_job2(self) -> str:
        self._logger.info(CRON_JOB_2)
        return CRON_JOB_2

    def execute(self, job_id: str) -> str:
        """Run the job registered under *job_id* ("1" or "2")."""
        job = self._jobs.get(str(job_id))
        if job is None:
            raise JobNotFoundException(
                f"No cron job with id '{job_id}'",
                code="JOB_NOT_FOUND",
                context={"job_id": job_id, "known": sorted(self._jobs)},
            )
        return job()

    def get_delay(self) -> timedelta:
        """Delay between a completed run and the next one on the dynamic trigger."""
        return self._delay
