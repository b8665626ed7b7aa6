"""get-packages: every known package, filtered."""

from __future__ import annotations

from pkdeopkg.enums import PkStatusEnum
from pkdeopkg.handlers.common import apply_filters, check_filters, emit_packages
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import PackageRecord


def get_packages(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    check_filters(args.filters)
    job.set_status(PkStatusEnum.QUERY)
    records = runtime.call_records("get_packages", PackageRecord)
    emit_packages(job, apply_filters(records, args.filters))
    job.finished()
