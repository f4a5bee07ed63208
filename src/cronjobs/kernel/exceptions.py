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
"""Exception hierarchy for cronjobs."""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CronJobsException(Exception):
    """Base exception for all cronjobs errors.

    Carries an optional error code and context dict for structured error data,
    so log records can carry the failing job and its parameters.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "JOB_NOT_FOUND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(CronJobsException):
    """Rule violations in how jobs are defined or requested."""


class ValidationException(BusinessException):
    """Invalid schedule definitions: non-positive intervals, bad cron, late registration."""


class ResourceNotFoundException(BusinessException):
    """Requested resource does not exist."""


class JobNotFoundException(ResourceNotFoundException):
    """No job is known under the requested id."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(CronJobsException):
    """Failures of the execution machinery rather than of a job's own logic."""


class InterruptedWaitException(InfrastructureException):
    """A job's wait was interrupted before it completed.

    Aborts only the invocation that was waiting; the scheduler records it as
    an interrupted execution and keeps its timer lines running.
    """
