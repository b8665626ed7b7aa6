"""Role handlers adapting PackageKit roles to runtime functions."""

from __future__ import annotations

from pkdeopkg.enums import PkRoleEnum
from pkdeopkg.jobs.contracts import RoleHandler

from .deps import depends_on, required_by
from .download import download_packages
from .files import get_files
from .info import get_details
from .install import install_packages
from .lookup import resolve
from .packages import get_packages
from .refresh import refresh_cache
from .remove import remove_packages
from .repos import get_repo_list, repo_enable
from .search import search_details, search_files, search_groups, search_names
from .updates import get_updates, update_packages

DEFAULT_HANDLERS: dict[PkRoleEnum, RoleHandler] = {
    PkRoleEnum.SEARCH_NAME: search_names,
    PkRoleEnum.SEARCH_DETAILS: search_details,
    PkRoleEnum.SEARCH_FILE: search_files,
    PkRoleEnum.SEARCH_GROUP: search_groups,
    PkRoleEnum.GET_PACKAGES: get_packages,
    PkRoleEnum.RESOLVE: resolve,
    PkRoleEnum.GET_DETAILS: get_details,
    PkRoleEnum.GET_FILES: get_files,
    PkRoleEnum.DEPENDS_ON: depends_on,
    PkRoleEnum.REQUIRED_BY: required_by,
    PkRoleEnum.GET_REPO_LIST: get_repo_list,
    PkRoleEnum.REPO_ENABLE: repo_enable,
    PkRoleEnum.REFRESH_CACHE: refresh_cache,
    PkRoleEnum.GET_UPDATES: get_updates,
    PkRoleEnum.UPDATE_PACKAGES: update_packages,
    PkRoleEnum.INSTALL_PACKAGES: install_packages,
    PkRoleEnum.REMOVE_PACKAGES: remove_packages,
    PkRoleEnum.DOWNLOAD_PACKAGES: download_packages,
}

__all__ = ["DEFAULT_HANDLERS"]
