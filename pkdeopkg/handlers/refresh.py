"""refresh-cache."""

from __future__ import annotations

from pkdeopkg.enums import PkStatusEnum
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime


def refresh_cache(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    job.set_status(PkStatusEnum.REFRESH_CACHE)
    job.set_percentage(0)
    runtime.call("refresh", args.force)
    job.set_percentage(100)
    job.finished()
