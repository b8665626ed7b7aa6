"""Static capability tables advertised to the PackageKit daemon.

Roles are a deny-list over every defined role so new roles are supported by
default; filters are a hand-picked allow-list. Keep the two styles distinct.
"""

from __future__ import annotations

import threading

from loguru import logger

from pkdeopkg.bitfield import Bitfield, bitfield_from_enums, bitfield_to_enums
from pkdeopkg.enums import PkFilterEnum, PkGroupEnum, PkRoleEnum

AUTHOR = "Ikey Doherty"
NAME = "deopkg"
DESCRIPTION = "eopkg support"

UNSUPPORTED_ROLES: frozenset[PkRoleEnum] = frozenset(
    {
        PkRoleEnum.UNKNOWN,
        PkRoleEnum.ACCEPT_EULA,
        PkRoleEnum.CANCEL,
        PkRoleEnum.GET_OLD_TRANSACTIONS,
    }
)

SUPPORTED_FILTERS: tuple[PkFilterEnum, ...] = (
    PkFilterEnum.DEVELOPMENT,
    PkFilterEnum.GUI,
    PkFilterEnum.INSTALLED,
)

# Roles that were looked at when the deny-list was written. Anything supported
# outside this set got there only because the enumeration grew.
REVIEWED_ROLES: frozenset[PkRoleEnum] = frozenset(
    {
        PkRoleEnum.DEPENDS_ON,
        PkRoleEnum.GET_DETAILS,
        PkRoleEnum.GET_FILES,
        PkRoleEnum.GET_PACKAGES,
        PkRoleEnum.GET_REPO_LIST,
        PkRoleEnum.REQUIRED_BY,
        PkRoleEnum.GET_UPDATE_DETAIL,
        PkRoleEnum.GET_UPDATES,
        PkRoleEnum.INSTALL_FILES,
        PkRoleEnum.INSTALL_PACKAGES,
        PkRoleEnum.INSTALL_SIGNATURE,
        PkRoleEnum.REFRESH_CACHE,
        PkRoleEnum.REMOVE_PACKAGES,
        PkRoleEnum.REPO_ENABLE,
        PkRoleEnum.REPO_SET_DATA,
        PkRoleEnum.RESOLVE,
        PkRoleEnum.SEARCH_DETAILS,
        PkRoleEnum.SEARCH_FILE,
        PkRoleEnum.SEARCH_GROUP,
        PkRoleEnum.SEARCH_NAME,
        PkRoleEnum.UPDATE_PACKAGES,
        PkRoleEnum.WHAT_PROVIDES,
        PkRoleEnum.DOWNLOAD_PACKAGES,
        PkRoleEnum.GET_DISTRO_UPGRADES,
        PkRoleEnum.GET_CATEGORIES,
        PkRoleEnum.REPAIR_SYSTEM,
        PkRoleEnum.GET_DETAILS_LOCAL,
        PkRoleEnum.GET_FILES_LOCAL,
        PkRoleEnum.REPO_REMOVE,
        PkRoleEnum.UPGRADE_SYSTEM,
    }
)

_MIME_TYPES: tuple[str | None, ...] = (None,)

_warned_lock = threading.Lock()
_warned_roles: set[PkRoleEnum] = set()


def get_author() -> str:
    return AUTHOR


def get_name() -> str:
    return NAME


def get_description() -> str:
    return DESCRIPTION


def get_groups() -> Bitfield:
    """Every defined group except UNKNOWN."""
    return bitfield_from_enums(group for group in PkGroupEnum if group != PkGroupEnum.UNKNOWN)


def get_roles() -> Bitfield:
    """Every defined role minus the unsupported set."""
    roles = [role for role in PkRoleEnum if role not in UNSUPPORTED_ROLES]
    _warn_unreviewed(roles)
    return bitfield_from_enums(roles)


def get_filters() -> Bitfield:
    return bitfield_from_enums(SUPPORTED_FILTERS)


def get_provides() -> Bitfield:
    return 0


def get_mime_types() -> list[str | None]:
    """None-terminated mime type list; a fresh copy per call."""
    return list(_MIME_TYPES)


def supports_parallelization() -> bool:
    """Jobs are never run concurrently. The dispatcher relies on this."""
    return False


def unreviewed_roles(
    roles: Bitfield,
    reviewed: frozenset[PkRoleEnum] = REVIEWED_ROLES,
) -> list[PkRoleEnum]:
    """Supported roles missing from ``reviewed``."""
    return [role for role in bitfield_to_enums(roles, PkRoleEnum) if role not in reviewed]


def _warn_unreviewed(roles: list[PkRoleEnum]) -> None:
    with _warned_lock:
        for role in roles:
            if role in REVIEWED_ROLES or role in _warned_roles:
                continue
            _warned_roles.add(role)
            logger.warning("Role {} is advertised without review (deny-list default)", role.text)
