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
"""'cronjobs run' — start the scheduler and run until interrupted."""

from __future__ import annotations

import asyncio

import click

from cronjobs.cli.console import console
from cronjobs.core.application import CronJobsApplication


@click.command()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True),
    help="Config file or directory holding cronjobs.yaml.",
)
@click.option("--profile", "profiles", multiple=True, help="Active profile (repeatable).")
def run_command(config_path: str | None, profiles: tuple[str, ...]) -> None:
    """Start the scheduler. Stop with Ctrl+C or SIGTERM."""
    app = CronJobsApplication(config_path=config_path, profiles=list(profiles) or None)
    try:
        asyncio.run(app.run())
    except KeyboardInterrupt:
        # Raised only where signal handlers could not be installed.
        console.print("[warning]Interrupted[/warning]")
