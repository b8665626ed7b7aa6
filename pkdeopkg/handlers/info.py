"""get-details."""

from __future__ import annotations

from pkdeopkg.enums import PkStatusEnum
from pkdeopkg.handlers.common import group_for_component, package_names
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import DetailsRecord
from pkdeopkg.utils.exceptions import PackageNotFoundError


def get_details(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    names = package_names(args.package_ids)
    job.set_status(PkStatusEnum.INFO)
    records = runtime.call_records("get_details", DetailsRecord, names)
    found = {r.name for r in records}
    missing = [n for n in names if n not in found]
    if missing:
        raise PackageNotFoundError(", ".join(missing))
    for record in records:
        job.details(
            record.package_id,
            record.summary,
            record.license,
            group_for_component(record.component),
            record.description,
            record.url,
            record.size,
        )
    job.finished()
