"""Utility functions for pkdeopkg."""

from pkdeopkg.utils.exceptions import (
    DeopkgError,
    ErrorCategory,
    FilterInvalidError,
    LifecycleError,
    PackageIdInvalidError,
    PackageNotFoundError,
    RepoNotFoundError,
    RoleNotSupportedError,
    RuntimeCallError,
    RuntimeStartError,
    RuntimeUnavailableError,
    classify_exception,
    job_error_message,
    sanitize_error_message,
)

__all__ = [
    "DeopkgError",
    "ErrorCategory",
    "FilterInvalidError",
    "LifecycleError",
    "PackageIdInvalidError",
    "PackageNotFoundError",
    "RepoNotFoundError",
    "RoleNotSupportedError",
    "RuntimeCallError",
    "RuntimeStartError",
    "RuntimeUnavailableError",
    "classify_exception",
    "job_error_message",
    "sanitize_error_message",
]
