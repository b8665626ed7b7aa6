"""get-repo-list and repo-enable."""

from __future__ import annotations

from pkdeopkg.enums import PkStatusEnum
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import RepoRecord
from pkdeopkg.utils.exceptions import RepoNotFoundError


def get_repo_list(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    job.set_status(PkStatusEnum.QUERY)
    for repo in runtime.call_records("get_repos", RepoRecord):
        job.repo_detail(repo.id, repo.description or repo.url, repo.enabled)
    job.finished()


def repo_enable(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    repo_id = args.repo_id.strip()
    if not repo_id:
        raise RepoNotFoundError(args.repo_id)
    job.set_status(PkStatusEnum.SETUP)
    updated = runtime.call_records("set_repo_enabled", RepoRecord, repo_id, args.enabled)
    if not updated:
        raise RepoNotFoundError(repo_id)
    job.finished()
