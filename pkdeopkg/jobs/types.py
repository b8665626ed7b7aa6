"""Job argument and state types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pkdeopkg.bitfield import Bitfield, bitfield_contain
from pkdeopkg.enums import PkTransactionFlagEnum


class JobState(str, Enum):
    RECEIVED = "received"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class JobArgs:
    """Role-specific arguments; each role reads only the fields it needs."""

    filters: Bitfield = 0
    values: tuple[str, ...] = field(default_factory=tuple)
    package_ids: tuple[str, ...] = field(default_factory=tuple)
    transaction_flags: Bitfield = 0
    force: bool = False
    allow_deps: bool = False
    autoremove: bool = False
    recursive: bool = False
    repo_id: str = ""
    enabled: bool = False
    directory: str = ""

    @property
    def simulate(self) -> bool:
        return bitfield_contain(self.transaction_flags, PkTransactionFlagEnum.SIMULATE)
