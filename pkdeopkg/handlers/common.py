"""Shared helpers for role handlers: package ids, filters, groups, emission."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from pkdeopkg.bitfield import Bitfield, bitfield_contain
from pkdeopkg.enums import PkFilterEnum, PkGroupEnum, PkInfoEnum
from pkdeopkg.jobs.contracts import JobSink
from pkdeopkg.runtime.records import PackageRecord
from pkdeopkg.utils.exceptions import FilterInvalidError, PackageIdInvalidError

R = TypeVar("R", bound=PackageRecord)

DEVELOPMENT_SUFFIXES = ("-devel", "-dbginfo")

# eopkg component prefix -> PackageKit group; longest prefix wins.
COMPONENT_GROUPS: dict[str, PkGroupEnum] = {
    "desktop": PkGroupEnum.DESKTOP_OTHER,
    "desktop.gnome": PkGroupEnum.DESKTOP_GNOME,
    "desktop.kde": PkGroupEnum.DESKTOP_KDE,
    "desktop.xfce": PkGroupEnum.DESKTOP_XFCE,
    "desktop.font": PkGroupEnum.FONTS,
    "desktop.theme": PkGroupEnum.DESKTOP_OTHER,
    "xorg": PkGroupEnum.DESKTOP_OTHER,
    "editor": PkGroupEnum.ACCESSORIES,
    "office": PkGroupEnum.OFFICE,
    "games": PkGroupEnum.GAMES,
    "multimedia": PkGroupEnum.MULTIMEDIA,
    "multimedia.graphics": PkGroupEnum.GRAPHICS,
    "network": PkGroupEnum.NETWORK,
    "network.web": PkGroupEnum.INTERNET,
    "network.chat": PkGroupEnum.COMMUNICATION,
    "network.mail": PkGroupEnum.COMMUNICATION,
    "programming": PkGroupEnum.PROGRAMMING,
    "security": PkGroupEnum.SECURITY,
    "server": PkGroupEnum.SERVERS,
    "database": PkGroupEnum.SERVERS,
    "system": PkGroupEnum.SYSTEM,
    "system.devel": PkGroupEnum.PROGRAMMING,
    "kernel": PkGroupEnum.SYSTEM,
    "virt": PkGroupEnum.VIRTUALIZATION,
    "science": PkGroupEnum.SCIENCE,
    "util": PkGroupEnum.ADMIN_TOOLS,
    "emul32": PkGroupEnum.LEGACY,
    "office.scientific": PkGroupEnum.SCIENCE,
    "localisation": PkGroupEnum.LOCALIZATION,
}

# (filter, negation) pairs the daemon may send for our advertised filters.
_FILTER_PAIRS: tuple[tuple[PkFilterEnum, PkFilterEnum], ...] = (
    (PkFilterEnum.INSTALLED, PkFilterEnum.NOT_INSTALLED),
    (PkFilterEnum.DEVELOPMENT, PkFilterEnum.NOT_DEVELOPMENT),
    (PkFilterEnum.GUI, PkFilterEnum.NOT_GUI),
)


@dataclass(slots=True, frozen=True)
class PackageId:
    name: str
    version: str
    arch: str
    data: str

    @classmethod
    def parse(cls, raw: str) -> "PackageId":
        parts = str(raw or "").split(";")
        if len(parts) != 4 or not parts[0].strip():
            raise PackageIdInvalidError(raw)
        name, version, arch, data = (p.strip() for p in parts)
        return cls(name=name, version=version, arch=arch, data=data)

    def __str__(self) -> str:
        return f"{self.name};{self.version};{self.arch};{self.data}"


def package_names(package_ids: Sequence[str], *, allow_names: bool = False) -> list[str]:
    """Package names from ids, in order, without duplicates."""
    if not package_ids:
        raise PackageIdInvalidError("")
    names: list[str] = []
    for raw in package_ids:
        if allow_names and ";" not in raw:
            name = raw.strip()
            if not name:
                raise PackageIdInvalidError(raw)
        else:
            name = PackageId.parse(raw).name
        names.append(name)
    return list(dict.fromkeys(names))


def check_filters(filters: Bitfield) -> None:
    for wanted, negated in _FILTER_PAIRS:
        if bitfield_contain(filters, wanted) and bitfield_contain(filters, negated):
            raise FilterInvalidError(f"Filters {wanted.text} and {negated.text} cannot be combined")


def is_development(record: PackageRecord) -> bool:
    return record.name.endswith(DEVELOPMENT_SUFFIXES)


def is_gui(record: PackageRecord) -> bool:
    return record.component == "desktop" or record.component.startswith("desktop.")


def group_for_component(component: str) -> PkGroupEnum:
    best = ""
    for prefix in COMPONENT_GROUPS:
        if (component == prefix or component.startswith(prefix + ".")) and len(prefix) > len(best):
            best = prefix
    return COMPONENT_GROUPS[best] if best else PkGroupEnum.OTHER


def _matches(filters: Bitfield, record: PackageRecord) -> bool:
    checks = (
        (PkFilterEnum.INSTALLED, PkFilterEnum.NOT_INSTALLED, record.installed),
        (PkFilterEnum.DEVELOPMENT, PkFilterEnum.NOT_DEVELOPMENT, is_development(record)),
        (PkFilterEnum.GUI, PkFilterEnum.NOT_GUI, is_gui(record)),
    )
    for wanted, negated, value in checks:
        if bitfield_contain(filters, wanted) and not value:
            return False
        if bitfield_contain(filters, negated) and value:
            return False
    return True


def apply_filters(records: Iterable[R], filters: Bitfield) -> list[R]:
    check_filters(filters)
    return [record for record in records if _matches(filters, record)]


def info_for(record: PackageRecord) -> PkInfoEnum:
    return PkInfoEnum.INSTALLED if record.installed else PkInfoEnum.AVAILABLE


def emit_packages(job: JobSink, records: Iterable[PackageRecord], info: PkInfoEnum | None = None) -> int:
    """Emit one package signal per record; returns the count."""
    count = 0
    for record in records:
        job.package(info if info is not None else info_for(record), record.package_id, record.summary)
        count += 1
    return count
