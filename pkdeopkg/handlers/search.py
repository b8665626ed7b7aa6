"""search-name, search-details, search-file and search-group."""

from __future__ import annotations

from pkdeopkg.enums import PkGroupEnum, PkStatusEnum
from pkdeopkg.handlers.common import apply_filters, check_filters, emit_packages, group_for_component
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.jobs.types import JobArgs
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.runtime.records import PackageRecord


def _terms(args: JobArgs) -> list[str]:
    return [v.strip() for v in args.values if v and v.strip()]


def _search(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime, *, details: bool) -> None:
    check_filters(args.filters)
    job.set_status(PkStatusEnum.QUERY)
    terms = _terms(args)
    if terms:
        records = runtime.call_records("search", PackageRecord, terms, details)
        emit_packages(job, apply_filters(records, args.filters))
    job.finished()


def search_names(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    _search(job, args, runtime, details=False)


def search_details(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    _search(job, args, runtime, details=True)


def search_files(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    check_filters(args.filters)
    job.set_status(PkStatusEnum.QUERY)
    paths = _terms(args)
    if paths:
        records = runtime.call_records("search_files", PackageRecord, paths)
        emit_packages(job, apply_filters(records, args.filters))
    job.finished()


def search_groups(job: JobSink, args: JobArgs, runtime: EmbeddedRuntime) -> None:
    """Match records whose component maps to a requested group, or sits under a requested component."""
    check_filters(args.filters)
    job.set_status(PkStatusEnum.QUERY)
    groups: set[PkGroupEnum] = set()
    components: list[str] = []
    for value in _terms(args):
        group = PkGroupEnum.from_text(value)
        if group is PkGroupEnum.UNKNOWN:
            components.append(value)
        else:
            groups.add(group)
    if groups or components:
        records = runtime.call_records("get_packages", PackageRecord)
        matched = [
            r
            for r in records
            if group_for_component(r.component) in groups
            or any(r.component == c or r.component.startswith(c + ".") for c in components)
        ]
        emit_packages(job, apply_filters(matched, args.filters))
    job.finished()
