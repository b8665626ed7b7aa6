"""get-files."""

from __future__ import annotations

from pkdeopkg.enums import PkStatusEnum
from pkdeopkg.handlers.common import package_names
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import FilesRecord


def get_files(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    names = package_names(args.package_ids)
    job.set_status(PkStatusEnum.INFO)
    for record in runtime.call_records("get_files", FilesRecord, names):
        job.files(record.package_id, record.files)
    job.finished()
