"""download-packages."""

from __future__ import annotations

from pkdeopkg.enums import PkInfoEnum, PkStatusEnum
from pkdeopkg.handlers.common import package_names
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import DownloadRecord


def download_packages(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    names = package_names(args.package_ids)
    job.set_status(PkStatusEnum.DOWNLOAD)
    for record in runtime.call_records("download", DownloadRecord, names, args.directory):
        job.package(PkInfoEnum.DOWNLOADING, record.package_id, record.summary)
        job.files(record.package_id, [record.path])
    job.finished()
