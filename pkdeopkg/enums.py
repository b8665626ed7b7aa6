"""PackageKit enumerations as seen on the backend ABI.

Integer values match the daemon's ``pk-enum.h`` so bitfields built here are
interchangeable with the host's. Text forms follow ``pk_*_enum_to_string``:
lower case with dashes (``SEARCH_NAME`` -> ``search-name``).
"""

from __future__ import annotations

from enum import IntEnum


class _PkEnum(IntEnum):
    @property
    def text(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_text(cls, value: str):
        key = str(value or "").strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            return cls(0)


class PkGroupEnum(_PkEnum):
    UNKNOWN = 0
    ACCESSIBILITY = 1
    ACCESSORIES = 2
    ADMIN_TOOLS = 3
    COMMUNICATION = 4
    DESKTOP_GNOME = 5
    DESKTOP_KDE = 6
    DESKTOP_OTHER = 7
    DESKTOP_XFCE = 8
    EDUCATION = 9
    FONTS = 10
    GAMES = 11
    GRAPHICS = 12
    INTERNET = 13
    LEGACY = 14
    LOCALIZATION = 15
    MAPS = 16
    MULTIMEDIA = 17
    NETWORK = 18
    OFFICE = 19
    OTHER = 20
    POWER_MANAGEMENT = 21
    PROGRAMMING = 22
    PUBLISHING = 23
    REPOS = 24
    SECURITY = 25
    SERVERS = 26
    SYSTEM = 27
    VIRTUALIZATION = 28
    SCIENCE = 29
    DOCUMENTATION = 30
    ELECTRONICS = 31
    COLLECTIONS = 32
    VENDOR = 33
    NEWEST = 34


class PkRoleEnum(_PkEnum):
    UNKNOWN = 0
    CANCEL = 1
    DEPENDS_ON = 2
    GET_DETAILS = 3
    GET_FILES = 4
    GET_PACKAGES = 5
    GET_REPO_LIST = 6
    REQUIRED_BY = 7
    GET_UPDATE_DETAIL = 8
    GET_UPDATES = 9
    INSTALL_FILES = 10
    INSTALL_PACKAGES = 11
    INSTALL_SIGNATURE = 12
    REFRESH_CACHE = 13
    REMOVE_PACKAGES = 14
    REPO_ENABLE = 15
    REPO_SET_DATA = 16
    RESOLVE = 17
    SEARCH_DETAILS = 18
    SEARCH_FILE = 19
    SEARCH_GROUP = 20
    SEARCH_NAME = 21
    UPDATE_PACKAGES = 22
    WHAT_PROVIDES = 23
    ACCEPT_EULA = 24
    DOWNLOAD_PACKAGES = 25
    GET_DISTRO_UPGRADES = 26
    GET_CATEGORIES = 27
    GET_OLD_TRANSACTIONS = 28
    REPAIR_SYSTEM = 29
    GET_DETAILS_LOCAL = 30
    GET_FILES_LOCAL = 31
    REPO_REMOVE = 32
    UPGRADE_SYSTEM = 33


class PkFilterEnum(_PkEnum):
    UNKNOWN = 0
    NONE = 1
    INSTALLED = 2
    NOT_INSTALLED = 3
    DEVELOPMENT = 4
    NOT_DEVELOPMENT = 5
    GUI = 6
    NOT_GUI = 7
    FREE = 8
    NOT_FREE = 9
    VISIBLE = 10
    NOT_VISIBLE = 11
    SUPPORTED = 12
    NOT_SUPPORTED = 13
    BASENAME = 14
    NOT_BASENAME = 15
    NEWEST = 16
    NOT_NEWEST = 17
    ARCH = 18
    NOT_ARCH = 19
    SOURCE = 20
    NOT_SOURCE = 21
    COLLECTIONS = 22
    NOT_COLLECTIONS = 23
    APPLICATION = 24
    NOT_APPLICATION = 25
    DOWNLOADED = 26
    NOT_DOWNLOADED = 27


class PkInfoEnum(_PkEnum):
    UNKNOWN = 0
    INSTALLED = 1
    AVAILABLE = 2
    LOW = 3
    ENHANCEMENT = 4
    NORMAL = 5
    BUGFIX = 6
    IMPORTANT = 7
    SECURITY = 8
    BLOCKED = 9
    DOWNLOADING = 10
    UPDATING = 11
    INSTALLING = 12
    REMOVING = 13
    CLEANUP = 14
    OBSOLETING = 15
    COLLECTION_INSTALLED = 16
    COLLECTION_AVAILABLE = 17
    FINISHED = 18
    REINSTALLING = 19
    DOWNGRADING = 20
    PREPARING = 21
    DECOMPRESSING = 22
    UNTRUSTED = 23
    TRUSTED = 24
    UNAVAILABLE = 25
    CRITICAL = 26


class PkErrorEnum(_PkEnum):
    UNKNOWN = 0
    OOM = 1
    NO_NETWORK = 2
    NOT_SUPPORTED = 3
    INTERNAL_ERROR = 4
    GPG_FAILURE = 5
    PACKAGE_ID_INVALID = 6
    PACKAGE_NOT_INSTALLED = 7
    PACKAGE_NOT_FOUND = 8
    PACKAGE_ALREADY_INSTALLED = 9
    PACKAGE_DOWNLOAD_FAILED = 10
    GROUP_NOT_FOUND = 11
    GROUP_LIST_INVALID = 12
    DEP_RESOLUTION_FAILED = 13
    FILTER_INVALID = 14
    CREATE_THREAD_FAILED = 15
    TRANSACTION_ERROR = 16
    TRANSACTION_CANCELLED = 17
    NO_CACHE = 18
    REPO_NOT_FOUND = 19
    CANNOT_REMOVE_SYSTEM_PACKAGE = 20
    PROCESS_KILL = 21
    FAILED_INITIALIZATION = 22
    FAILED_FINALISE = 23
    FAILED_CONFIG_PARSING = 24
    CANNOT_CANCEL = 25
    CANNOT_GET_LOCK = 26
    NO_PACKAGES_TO_UPDATE = 27
    CANNOT_WRITE_REPO_CONFIG = 28
    LOCAL_INSTALL_FAILED = 29
    BAD_GPG_SIGNATURE = 30
    MISSING_GPG_SIGNATURE = 31
    CANNOT_INSTALL_SOURCE_PACKAGE = 32
    REPO_CONFIGURATION_ERROR = 33
    NO_LICENSE_AGREEMENT = 34
    FILE_CONFLICTS = 35
    PACKAGE_CONFLICTS = 36
    REPO_NOT_AVAILABLE = 37
    INVALID_PACKAGE_FILE = 38
    PACKAGE_INSTALL_BLOCKED = 39
    PACKAGE_CORRUPT = 40
    ALL_PACKAGES_ALREADY_INSTALLED = 41
    FILE_NOT_FOUND = 42
    NO_MORE_MIRRORS_TO_TRY = 43
    NO_DISTRO_UPGRADE_DATA = 44
    INCOMPATIBLE_ARCHITECTURE = 45
    NO_SPACE_ON_DEVICE = 46
    MEDIA_CHANGE_REQUIRED = 47
    NOT_AUTHORIZED = 48


class PkStatusEnum(_PkEnum):
    UNKNOWN = 0
    WAIT = 1
    SETUP = 2
    RUNNING = 3
    QUERY = 4
    INFO = 5
    REMOVE = 6
    REFRESH_CACHE = 7
    DOWNLOAD = 8
    INSTALL = 9
    UPDATE = 10
    CLEANUP = 11
    OBSOLETE = 12
    DEP_RESOLVE = 13
    SIG_CHECK = 14
    TEST_COMMIT = 15
    COMMIT = 16
    REQUEST = 17
    FINISHED = 18


class PkTransactionFlagEnum(_PkEnum):
    NONE = 0
    ONLY_TRUSTED = 1
    SIMULATE = 2
    ONLY_DOWNLOAD = 3
    ALLOW_REINSTALL = 4
    JUST_REINSTALL = 5
    ALLOW_DOWNGRADE = 6
