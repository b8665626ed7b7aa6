"""Synchronous job dispatch with a guaranteed single terminal signal."""

from __future__ import annotations

import threading
from collections.abc import Mapping

from loguru import logger

from pkdeopkg.enums import PkErrorEnum, PkGroupEnum, PkInfoEnum, PkRoleEnum, PkStatusEnum
from pkdeopkg.jobs.contracts import JobSink, RoleHandler
from pkdeopkg.jobs.types import JobArgs, JobState
from pkdeopkg.runtime.lifecycle import RuntimeLifecycle
from pkdeopkg.utils.exceptions import (
    DeopkgError,
    RoleNotSupportedError,
    classify_exception,
    job_error_message,
)

# Acknowledged without doing any runtime work.
NOOP_ROLES: frozenset[PkRoleEnum] = frozenset({PkRoleEnum.REPAIR_SYSTEM})


class TrackedJob:
    """
    Wraps a host job and enforces RECEIVED -> RUNNING -> FINISHED | FAILED.

    Emissions after the terminal signal, and any second terminal signal, are
    dropped with a warning instead of reaching the host.
    """

    def __init__(self, job: JobSink, role: PkRoleEnum):
        self.job = job
        self.role = role
        self.state = JobState.RECEIVED

    @property
    def terminal(self) -> bool:
        return self.state in (JobState.FINISHED, JobState.FAILED)

    def start(self) -> None:
        if self.state is not JobState.RECEIVED:
            raise RuntimeError(f"job already {self.state.value}")
        self.state = JobState.RUNNING

    def _emitting(self, what: str) -> bool:
        if self.terminal:
            logger.warning("Dropping {} for {} job after it was {}", what, self.role.text, self.state.value)
            return False
        return True

    def package(self, info: PkInfoEnum, package_id: str, summary: str) -> None:
        if self._emitting("package"):
            self.job.package(info, package_id, summary)

    def details(
        self,
        package_id: str,
        summary: str,
        license: str,
        group: PkGroupEnum,
        description: str,
        url: str,
        size: int,
    ) -> None:
        if self._emitting("details"):
            self.job.details(package_id, summary, license, group, description, url, size)

    def files(self, package_id: str, files: list[str]) -> None:
        if self._emitting("files"):
            self.job.files(package_id, list(files))

    def repo_detail(self, repo_id: str, description: str, enabled: bool) -> None:
        if self._emitting("repo detail"):
            self.job.repo_detail(repo_id, description, enabled)

    def set_percentage(self, percent: int) -> None:
        if self._emitting("percentage"):
            self.job.set_percentage(percent)

    def set_status(self, status: PkStatusEnum) -> None:
        if self._emitting("status"):
            self.job.set_status(status)

    def finished(self) -> None:
        if not self._emitting("finished"):
            return
        self.state = JobState.FINISHED
        self.job.finished()

    def failed(self, code: PkErrorEnum, message: str) -> None:
        if not self._emitting(f"error {code.text}"):
            return
        self.state = JobState.FAILED
        self.job.failed(code, message)


class JobDispatcher:
    """Runs one role handler at a time on the caller's thread."""

    def __init__(self, lifecycle: RuntimeLifecycle, handlers: Mapping[PkRoleEnum, RoleHandler]):
        self.lifecycle = lifecycle
        self.handlers = dict(handlers)
        self._busy = threading.Lock()
        self._active: JobSink | None = None

    def dispatch(self, role: PkRoleEnum, job: JobSink, args: JobArgs | None = None) -> JobState:
        """Run ``role`` for ``job``; the job has exactly one terminal signal on return."""
        if self._active is not None and job is self._active:
            logger.error("Re-entrant dispatch of {} on a running job rejected", role.text)
            return JobState.RUNNING
        if not self._busy.acquire(blocking=False):
            logger.error("Rejected {} job: backend does not run jobs in parallel", role.text)
            tracked = TrackedJob(job, role)
            tracked.start()
            tracked.failed(PkErrorEnum.CANNOT_GET_LOCK, "Another job is already running on this backend")
            return tracked.state
        self._active = job
        try:
            return self._run(role, job, args or JobArgs())
        finally:
            self._active = None
            self._busy.release()

    def _run(self, role: PkRoleEnum, job: JobSink, args: JobArgs) -> JobState:
        tracked = TrackedJob(job, role)
        tracked.start()
        logger.debug("Dispatching {} job", role.text)
        try:
            if role in NOOP_ROLES:
                tracked.finished()
                return tracked.state
            handler = self.handlers.get(role)
            if handler is None:
                raise RoleNotSupportedError(role)
            runtime = self.lifecycle.runtime()
            with runtime.bind(tracked):
                handler(tracked, args, runtime)
        except BaseException as exc:
            # Includes SystemExit raised by runtime code.
            _fail(tracked, exc)
            if isinstance(exc, KeyboardInterrupt):
                raise
        if not tracked.terminal:
            logger.error("{} handler returned without finalizing the job", role.text)
            tracked.failed(PkErrorEnum.INTERNAL_ERROR, f"Backend did not finish the {role.text} job")
        return tracked.state


def _fail(tracked: TrackedJob, exc: BaseException) -> None:
    code, category = classify_exception(exc)
    if isinstance(exc, DeopkgError):
        logger.warning("{} job failed ({}): {}", tracked.role.text, category.value, exc)
    else:
        logger.opt(exception=exc).error("{} job raised an unexpected {} error", tracked.role.text, category.value)
    tracked.failed(code, job_error_message(exc))
