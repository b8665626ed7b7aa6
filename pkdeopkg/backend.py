"""
PackageKit backend surface for deopkg.

Mirrors the daemon's backend contract (pk-backend.c): identification,
initialize/destroy, capability queries and one entry point per role. Every
role entry point hands its job to the dispatcher, which finalizes it before
returning.
"""

from __future__ import annotations

import configparser
import threading
from collections.abc import Mapping, Sequence
from configparser import ConfigParser

from loguru import logger

from pkdeopkg import capabilities
from pkdeopkg.bitfield import Bitfield
from pkdeopkg.config.loader import load_settings
from pkdeopkg.config.schema import BackendSettings
from pkdeopkg.enums import PkRoleEnum
from pkdeopkg.handlers import DEFAULT_HANDLERS
from pkdeopkg.jobs.contracts import JobSink, RoleHandler
from pkdeopkg.jobs.dispatch import JobDispatcher
from pkdeopkg.jobs.types import JobArgs, JobState
from pkdeopkg.logging_utils import configure_logging
from pkdeopkg.runtime.lifecycle import LifecycleState, RuntimeLifecycle, get_runtime_lifecycle
from pkdeopkg.utils.exceptions import RuntimeStartError

_singleton_lock = threading.Lock()
_singleton: "Backend | None" = None


class Backend:
    """The single loaded backend instance."""

    def __init__(
        self,
        lifecycle: RuntimeLifecycle | None = None,
        handlers: Mapping[PkRoleEnum, RoleHandler] | None = None,
        settings: BackendSettings | None = None,
    ):
        self.lifecycle = lifecycle or get_runtime_lifecycle()
        self.dispatcher = JobDispatcher(self.lifecycle, handlers if handlers is not None else DEFAULT_HANDLERS)
        self.settings = settings
        self.config: ConfigParser | None = None

    # identification

    def get_author(self) -> str:
        return capabilities.get_author()

    def get_name(self) -> str:
        return capabilities.get_name()

    def get_description(self) -> str:
        return capabilities.get_description()

    # lifecycle

    def initialize(self, config: ConfigParser | None = None) -> None:
        """Register the bridge module and start the embedded runtime."""
        self.config = config
        logger.info("Init")
        try:
            if self.settings is None:
                self.settings = self._resolve_settings(config)
            configure_logging(self.settings)
        except Exception as e:
            script = str(self.settings.script_path) if self.settings is not None else "unresolved settings"
            self.lifecycle.record_failure(RuntimeStartError(script, f"{e.__class__.__name__}: {e}"))
            return
        self.lifecycle.initialize(self.settings)

    @staticmethod
    def _resolve_settings(config: ConfigParser | None) -> BackendSettings:
        try:
            return load_settings(config)
        except (ValueError, configparser.Error) as e:
            if config is None:
                raise
            logger.error("{}; using environment defaults", e)
            return load_settings(None)

    def destroy(self) -> None:
        logger.info("Destroy")
        if self.lifecycle.state is LifecycleState.INITIALIZED:
            self.lifecycle.destroy()

    # capabilities

    def get_groups(self) -> Bitfield:
        return capabilities.get_groups()

    def get_roles(self) -> Bitfield:
        return capabilities.get_roles()

    def get_filters(self) -> Bitfield:
        return capabilities.get_filters()

    def get_provides(self) -> Bitfield:
        return capabilities.get_provides()

    def get_mime_types(self) -> list[str | None]:
        return capabilities.get_mime_types()

    def supports_parallelization(self) -> bool:
        return capabilities.supports_parallelization()

    # roles

    def _dispatch(self, role: PkRoleEnum, job: JobSink, **kwargs) -> JobState:
        return self.dispatcher.dispatch(role, job, JobArgs(**kwargs))

    def search_names(self, job: JobSink, filters: Bitfield, values: Sequence[str]) -> JobState:
        return self._dispatch(PkRoleEnum.SEARCH_NAME, job, filters=filters, values=tuple(values))

    def search_details(self, job: JobSink, filters: Bitfield, values: Sequence[str]) -> JobState:
        return self._dispatch(PkRoleEnum.SEARCH_DETAILS, job, filters=filters, values=tuple(values))

    def search_files(self, job: JobSink, filters: Bitfield, values: Sequence[str]) -> JobState:
        return self._dispatch(PkRoleEnum.SEARCH_FILE, job, filters=filters, values=tuple(values))

    def search_groups(self, job: JobSink, filters: Bitfield, values: Sequence[str]) -> JobState:
        return self._dispatch(PkRoleEnum.SEARCH_GROUP, job, filters=filters, values=tuple(values))

    def get_packages(self, job: JobSink, filters: Bitfield) -> JobState:
        return self._dispatch(PkRoleEnum.GET_PACKAGES, job, filters=filters)

    def resolve(self, job: JobSink, filters: Bitfield, package_ids: Sequence[str]) -> JobState:
        return self._dispatch(PkRoleEnum.RESOLVE, job, filters=filters, package_ids=tuple(package_ids))

    def get_details(self, job: JobSink, package_ids: Sequence[str]) -> JobState:
        return self._dispatch(PkRoleEnum.GET_DETAILS, job, package_ids=tuple(package_ids))

    def get_files(self, job: JobSink, package_ids: Sequence[str]) -> JobState:
        return self._dispatch(PkRoleEnum.GET_FILES, job, package_ids=tuple(package_ids))

    def depends_on(
        self, job: JobSink, filters: Bitfield, package_ids: Sequence[str], recursive: bool
    ) -> JobState:
        return self._dispatch(
            PkRoleEnum.DEPENDS_ON, job, filters=filters, package_ids=tuple(package_ids), recursive=recursive
        )

    def required_by(
        self, job: JobSink, filters: Bitfield, package_ids: Sequence[str], recursive: bool
    ) -> JobState:
        return self._dispatch(
            PkRoleEnum.REQUIRED_BY, job, filters=filters, package_ids=tuple(package_ids), recursive=recursive
        )

    def get_repo_list(self, job: JobSink, filters: Bitfield) -> JobState:
        return self._dispatch(PkRoleEnum.GET_REPO_LIST, job, filters=filters)

    def repo_enable(self, job: JobSink, repo_id: str, enabled: bool) -> JobState:
        return self._dispatch(PkRoleEnum.REPO_ENABLE, job, repo_id=repo_id, enabled=enabled)

    def refresh_cache(self, job: JobSink, force: bool) -> JobState:
        return self._dispatch(PkRoleEnum.REFRESH_CACHE, job, force=force)

    def get_updates(self, job: JobSink, filters: Bitfield) -> JobState:
        return self._dispatch(PkRoleEnum.GET_UPDATES, job, filters=filters)

    def install_packages(self, job: JobSink, transaction_flags: Bitfield, package_ids: Sequence[str]) -> JobState:
        return self._dispatch(
            PkRoleEnum.INSTALL_PACKAGES, job, transaction_flags=transaction_flags, package_ids=tuple(package_ids)
        )

    def remove_packages(
        self,
        job: JobSink,
        transaction_flags: Bitfield,
        package_ids: Sequence[str],
        allow_deps: bool,
        autoremove: bool,
    ) -> JobState:
        return self._dispatch(
            PkRoleEnum.REMOVE_PACKAGES,
            job,
            transaction_flags=transaction_flags,
            package_ids=tuple(package_ids),
            allow_deps=allow_deps,
            autoremove=autoremove,
        )

    def update_packages(self, job: JobSink, transaction_flags: Bitfield, package_ids: Sequence[str]) -> JobState:
        return self._dispatch(
            PkRoleEnum.UPDATE_PACKAGES, job, transaction_flags=transaction_flags, package_ids=tuple(package_ids)
        )

    def download_packages(self, job: JobSink, package_ids: Sequence[str], directory: str | None = None) -> JobState:
        target = directory or (str(self.settings.download_dir) if self.settings else "")
        return self._dispatch(PkRoleEnum.DOWNLOAD_PACKAGES, job, package_ids=tuple(package_ids), directory=target)

    def repair_system(self, job: JobSink, transaction_flags: Bitfield) -> JobState:
        """Not supported: acknowledged as finished without doing anything."""
        return self._dispatch(PkRoleEnum.REPAIR_SYSTEM, job, transaction_flags=transaction_flags)


def get_backend() -> Backend:
    """Get or create the process-global backend."""
    global _singleton
    with _singleton_lock:
        if _singleton is None:
            _singleton = Backend()
        return _singleton
