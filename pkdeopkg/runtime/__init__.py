"""Embedded runtime: lifecycle, bridge module, call marshaling."""

from .bridge import BridgeModule
from .interpreter import EmbeddedRuntime
from .lifecycle import LifecycleState, RuntimeLifecycle, get_runtime_lifecycle
from .records import DetailsRecord, DownloadRecord, FilesRecord, PackageRecord, RepoRecord

__all__ = [
    "BridgeModule",
    "DetailsRecord",
    "DownloadRecord",
    "EmbeddedRuntime",
    "FilesRecord",
    "LifecycleState",
    "PackageRecord",
    "RepoRecord",
    "RuntimeLifecycle",
    "get_runtime_lifecycle",
]
