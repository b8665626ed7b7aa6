"""Typed records returned by runtime functions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

INSTALLED_DATA = "installed"


class PackageRecord(BaseModel):
    """One package as reported by the runtime."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(min_length=1)
    version: str
    release: str = ""
    arch: str = "x86_64"
    repo: str = ""
    summary: str = ""
    component: str = ""
    installed: bool = False
    severity: str | None = None

    @field_validator("release", mode="before")
    @classmethod
    def _release_as_text(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value

    @property
    def full_version(self) -> str:
        return f"{self.version}-{self.release}" if self.release else self.version

    @property
    def data(self) -> str:
        return INSTALLED_DATA if self.installed else self.repo

    @property
    def package_id(self) -> str:
        return f"{self.name};{self.full_version};{self.arch};{self.data}"


class DetailsRecord(PackageRecord):
    license: str = "unknown"
    description: str = ""
    url: str = ""
    size: int = 0


class FilesRecord(PackageRecord):
    files: list[str] = Field(default_factory=list)


class DownloadRecord(PackageRecord):
    path: str


class RepoRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1)
    description: str = ""
    enabled: bool = True
    url: str = ""
