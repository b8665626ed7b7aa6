"""resolve: names or package ids to packages."""

from __future__ import annotations

from pkdeopkg.enums import PkStatusEnum
from pkdeopkg.handlers.common import apply_filters, check_filters, emit_packages, package_names
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import PackageRecord


def resolve(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    check_filters(args.filters)
    names = package_names(args.package_ids or args.values, allow_names=True)
    job.set_status(PkStatusEnum.QUERY)
    records = runtime.call_records("resolve", PackageRecord, names)
    emit_packages(job, apply_filters(records, args.filters))
    job.finished()
