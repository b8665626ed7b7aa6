"""Bitfield helpers mirroring ``pk-bitfield.h``.

A bitfield is a plain ``int``; enum value ``v`` occupies bit ``1 << v``.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum
from typing import TypeVar

E = TypeVar("E", bound=IntEnum)

Bitfield = int


def bitfield_value(value: int) -> Bitfield:
    return 1 << int(value)


def bitfield_add(bitfield: Bitfield, value: int) -> Bitfield:
    return bitfield | bitfield_value(value)


def bitfield_remove(bitfield: Bitfield, value: int) -> Bitfield:
    return bitfield & ~bitfield_value(value)


def bitfield_contain(bitfield: Bitfield, value: int) -> bool:
    return bool(bitfield & bitfield_value(value))


def bitfield_from_enums(values: Iterable[int]) -> Bitfield:
    """Pack enum values into a bitfield."""
    out: Bitfield = 0
    for value in values:
        out = bitfield_add(out, value)
    return out


def bitfield_to_enums(bitfield: Bitfield, enum_cls: type[E]) -> list[E]:
    """Unpack a bitfield into the known members of ``enum_cls``, in value order."""
    return [member for member in enum_cls if bitfield_contain(bitfield, member)]
