"""remove-packages."""

from __future__ import annotations

from pkdeopkg.enums import PkInfoEnum, PkStatusEnum
from pkdeopkg.handlers.common import emit_packages, package_names
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import PackageRecord


def remove_packages(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    names = package_names(args.package_ids)
    function = "plan_remove" if args.simulate else "remove"
    job.set_status(PkStatusEnum.DEP_RESOLVE if args.simulate else PkStatusEnum.REMOVE)
    records = runtime.call_records(function, PackageRecord, names, args.allow_deps, args.autoremove)
    emit_packages(job, records, PkInfoEnum.REMOVING)
    job.finished()
