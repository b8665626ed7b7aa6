"""depends-on and required-by."""

from __future__ import annotations

from pkdeopkg.enums import PkStatusEnum
from pkdeopkg.handlers.common import apply_filters, check_filters, emit_packages, package_names
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import PackageRecord


def _walk(function: str, job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    check_filters(args.filters)
    names = package_names(args.package_ids)
    job.set_status(PkStatusEnum.DEP_RESOLVE)
    records = runtime.call_records(function, PackageRecord, names, args.recursive)
    emit_packages(job, apply_filters(records, args.filters))
    job.finished()


def depends_on(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    _walk("depends_on", job, args, runtime)


def required_by(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    _walk("required_by", job, args, runtime)
