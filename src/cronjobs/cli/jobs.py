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
"""'cronjobs jobs' — list the registered timer lines."""

from __future__ import annotations

import click
from rich.table import Table

from cronjobs.cli.console import console
from cronjobs.core.application import CronJobsApplication
from cronjobs.scheduling.execution import ScheduledTask, ScheduleKind


def _describe(task: ScheduledTask) -> str:
    if task.kind is ScheduleKind.CRON and task.cron is not None:
        return task.cron.expression
    if task.interval is not None:
        return f"every {int(task.interval.total_seconds() * 1000)} ms"
    return "dynamic"


def _next_run(task: ScheduledTask) -> str:
    if task.cron is None:
        return "-"
    return task.cron.next_fire_time().strftime("%a %H:%M:%S")


@click.command()
@click.option("--config", "config_path", default=None, type=click.Path(exists=True), help="Config file or directory.")
@click.option("--profile", "profiles", multiple=True, help="Active profile (repeatable).")
def jobs_command(config_path: str | None, profiles: tuple[str, ...]) -> None:
    """List the jobs the scheduler would run."""
    app = CronJobsApplication(config_path=config_path, profiles=list(profiles) or None)

    table = Table(title="Scheduled jobs", border_style="dim")
    table.add_column("Name", style="info")
    table.add_column("Kind")
    table.add_column("Schedule")
    table.add_column("Async")
    table.add_column("Next run")
    for task in app.scheduler.registrations:
        async_flag = "yes" if task.run_async else "no"
        table.add_row(task.name, task.kind.value, _describe(task), async_flag, _next_run(task))
    console.print(table)
