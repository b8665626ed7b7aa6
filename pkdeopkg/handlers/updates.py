"""get-updates and update-packages."""

from __future__ import annotations

from pkdeopkg.enums import PkInfoEnum, PkStatusEnum
from pkdeopkg.handlers.common import apply_filters, check_filters, emit_packages, package_names
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import PackageRecord

SEVERITY_INFO: dict[str, PkInfoEnum] = {
    "security": PkInfoEnum.SECURITY,
    "critical": PkInfoEnum.CRITICAL,
    "important": PkInfoEnum.IMPORTANT,
    "bugfix": PkInfoEnum.BUGFIX,
    "enhancement": PkInfoEnum.ENHANCEMENT,
    "low": PkInfoEnum.LOW,
}


def get_updates(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    check_filters(args.filters)
    job.set_status(PkStatusEnum.QUERY)
    records = runtime.call_records("get_updates", PackageRecord)
    for record in apply_filters(records, args.filters):
        info = SEVERITY_INFO.get((record.severity or "").lower(), PkInfoEnum.NORMAL)
        job.package(info, record.package_id, record.summary)
    job.finished()


def update_packages(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    names = package_names(args.package_ids)
    if args.simulate:
        job.set_status(PkStatusEnum.DEP_RESOLVE)
        emit_packages(job, runtime.call_records("plan_update", PackageRecord, names), PkInfoEnum.UPDATING)
    else:
        job.set_status(PkStatusEnum.UPDATE)
        job.set_percentage(0)
        emit_packages(job, runtime.call_records("update", PackageRecord, names), PkInfoEnum.UPDATING)
        job.set_percentage(100)
    job.finished()
