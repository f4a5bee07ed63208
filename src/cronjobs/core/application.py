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
"""Application bootstrap — wires config, logging, jobs and the scheduler."""

from __future__ import annotations

import asyncio
import os
import platform
import signal
import time
from pathlib import Path

import yaml  # type: ignore[import-untyped]

from cronjobs import __version__
from cronjobs.config.cron_config import CronConfig
from cronjobs.config.dynamic_scheduling_config import DynamicSchedulingConfig
from cronjobs.config.properties.scheduling import SchedulingProperties
from cronjobs.core.config import Config
from cronjobs.logging.port import LoggingPort
from cronjobs.logging.structlog_adapter import StructlogAdapter
from cronjobs.scheduling.adapters.thread_executor import ThreadPoolTaskExecutor
from cronjobs.scheduling.task_scheduler import TaskScheduler
from cronjobs.service.cron_service import CronService

_CONFIG_CANDIDATES = ("cronjobs.yaml", "cronjobs.toml", "config/cronjobs.yaml", "config/cronjobs.toml")


class CronJobsApplication:
    """Main application class.

    Startup sequence:
    1. Load configuration (defaults, project files, profile overlays)
    2. Configure logging from the ``cronjobs.logging`` section
    3. Build the job service and register every job with the scheduler
    4. Start the scheduler; run until SIGINT/SIGTERM or the stop event
    5. Stop the scheduler, interrupting in-flight waits
    """

    def __init__(
        self,
        config_path: str | Path | None = None,
        profiles: list[str] | None = None,
        config: Config | None = None,
        logging_port: LoggingPort | None = None,
    ) -> None:
        if config is None:
            config_dir = self._find_config_dir(config_path)
            self._profiles = (
                profiles if profiles is not None else self._resolve_profiles_early(config_dir, config_path)
            )
            if config_path and Path(config_path).is_file():
                config = Config.from_file(config_path, active_profiles=self._profiles)
            elif config_dir is not None:
                config = Config.from_sources(config_dir, active_profiles=self._profiles)
            else:
                config = Config.defaults()
        else:
            self._profiles = list(profiles or [])
        self.config = config

        self._logging: LoggingPort = logging_port or StructlogAdapter()
        self._logging.configure(self.config)
        self._logger = self._logging.get_logger("cronjobs.core")

        self._name = str(self.config.get("cronjobs.app.name", "cronjobs"))
        self._startup_time: float = 0.0

        self.properties = self.config.bind(SchedulingProperties)
        self.cron_service = CronService(self._logging.get_logger("cronjobs.service"), delay=self.properties.delay)
        self.scheduler = TaskScheduler(
            executor=ThreadPoolTaskExecutor(max_workers=self.properties.pool_size),
            logger=self._logging.get_logger("cronjobs.scheduling"),
        )

        CronConfig(self.cron_service, self.properties, self._logging.get_logger("cronjobs.config")).configure_tasks(
            self.scheduler
        )
        DynamicSchedulingConfig(self.cron_service).configure_tasks(self.scheduler)

    @property
    def startup_time_seconds(self) -> float:
        return self._startup_time

    async def startup(self) -> None:
        start = time.perf_counter()
        self._logger.info(
            "starting_application",
            app=self._name,
            version=__version__,
            python=platform.python_version(),
            pid=os.getpid(),
        )
        if self._profiles:
            self._logger.info("active_profiles", profiles=self._profiles)
        else:
            self._logger.info("no_active_profiles", message="No active profiles set, falling back to default")
        for source in self.config.loaded_sources:
            self._logger.info("loaded_config", source=source)

        await self.scheduler.start()

        self._startup_time = time.perf_counter() - start
        self._logger.info(
            "application_started",
            app=self._name,
            startup_time_s=round(self._startup_time, 3),
            tasks=[task.name for task in self.scheduler.registrations],
        )

    async def shutdown(self, wait: bool = False) -> None:
        """Stop the scheduler. In-flight waits are interrupted unless *wait*."""
        self._logger.info("shutting_down", app=self._name)
        await self.scheduler.stop(wait=wait)

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """Start, block until *stop_event* is set or a signal arrives, then shut down."""
        stop_event = stop_event or asyncio.Event()
        loop = asyncio.get_running_loop()
        installed: list[signal.Signals] = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop_event.set)
                installed.append(sig)
            except (NotImplementedError, RuntimeError):
                # Not supported on this platform or outside the main thread.
                pass

        try:
            await self.startup()
            await stop_event.wait()
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)
            await self.shutdown()

    @staticmethod
    def _find_config_dir(config_path: str | Path | None) -> Path | None:
        """Find the project directory containing config files."""
        if config_path:
            p = Path(config_path)
            return p.parent if p.is_file() else p
        for candidate in _CONFIG_CANDIDATES:
            if Path(candidate).exists():
                return Path(".")
        return None

    @staticmethod
    def _resolve_profiles_early(
        config_dir: Path | None, config_path: str | Path | None = None
    ) -> list[str]:
        """Resolve active profiles before the full config load.

        An explicit config file is the only candidate; otherwise the
        project files in *config_dir* are checked.
        """
        env_profiles = os.environ.get("CRONJOBS_PROFILES_ACTIVE", "")
        if env_profiles:
            return [p.strip() for p in env_profiles.split(",") if p.strip()]

        if config_path and Path(config_path).is_file():
            candidates: tuple[Path, ...] = (Path(config_path),)
        elif config_dir is not None:
            candidates = (config_dir / "config" / "cronjobs.yaml", config_dir / "cronjobs.yaml")
        else:
            return []

        for candidate in candidates:
            if candidate.suffix in (".yaml", ".yml") and candidate.exists():
                with open(candidate) as f:
                    data = yaml.safe_load(f) or {}
                profiles_value = (data.get("cronjobs", {}) or {}).get("profiles", {})
                active = profiles_value.get("active", "") if isinstance(profiles_value, dict) else ""
                if active:
                    return [p.strip() for p in str(active).split(",") if p.strip()]

        return []
