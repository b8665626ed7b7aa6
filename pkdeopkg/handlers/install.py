"""install-packages."""

from __future__ import annotations

from pkdeopkg.enums import PkInfoEnum, PkStatusEnum
from pkdeopkg.handlers.common import emit_packages, package_names
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import PackageRecord


def install_packages(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    names = package_names(args.package_ids)
    if args.simulate:
        job.set_status(PkStatusEnum.DEP_RESOLVE)
        emit_packages(job, runtime.call_records("plan_install", PackageRecord, names), PkInfoEnum.INSTALLING)
        job.finished()
        return
    job.set_status(PkStatusEnum.INSTALL)
    job.set_percentage(0)
    emit_packages(job, runtime.call_records("install", PackageRecord, names), PkInfoEnum.INSTALLING)
    job.set_percentage(100)
    job.finished()
