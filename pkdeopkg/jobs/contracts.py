"""Host job callback surface consumed by handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pkdeopkg.enums import PkErrorEnum, PkGroupEnum, PkInfoEnum, PkStatusEnum

if TYPE_CHECKING:
    from pkdeopkg.jobs.types import JobArgs
    from pkdeopkg.runtime.interpreter import EmbeddedRuntime


@runtime_checkable
class JobSink(Protocol):
    def package(self, info: PkInfoEnum, package_id: str, summary: str) -> None: ...
    def details(
        self,
        package_id: str,
        summary: str,
        license: str,
        group: PkGroupEnum,
        description: str,
        url: str,
        size: int,
    ) -> None: ...
    def files(self, package_id: str, files: list[str]) -> None: ...
    def repo_detail(self, repo_id: str, description: str, enabled: bool) -> None: ...
    def set_percentage(self, percent: int) -> None: ...
    def set_status(self, status: PkStatusEnum) -> None: ...
    def finished(self) -> None: ...
    def failed(self, code: PkErrorEnum, message: str) -> None: ...


class RoleHandler(Protocol):
    def __call__(self, job: JobSink, args: "JobArgs", runtime: "EmbeddedRuntime") -> None: ...
