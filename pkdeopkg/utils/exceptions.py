"""
Exception hierarchy and error classification for the deopkg backend.

Provides:
- Backend exceptions carrying a PackageKit error code
- Error categorization (recoverable, fatal, validation, ...)
- Safe error message formatting (no sensitive data leak)
- Mapping of arbitrary exceptions onto PackageKit error codes and categories
"""

from __future__ import annotations

import errno
import re
from enum import Enum
from pkdeopkg.enums import PkErrorEnum, PkRoleEnum


class ErrorCategory(Enum):
    """Error categories for classification."""
    RECOVERABLE = "recoverable"
    FATAL = "fatal"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERMISSION = "permission"
    UNSUPPORTED = "unsupported"


class DeopkgError(Exception):
    """Base exception for all backend errors surfaced to a job."""

    def __init__(
        self,
        message: str,
        code: PkErrorEnum = PkErrorEnum.INTERNAL_ERROR,
        category: ErrorCategory = ErrorCategory.FATAL,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category

    def __str__(self) -> str:
        return f"[{self.code.text}] {self.message}"


class LifecycleError(RuntimeError):
    """Runtime lifecycle called out of protocol order."""


class RuntimeStartError(DeopkgError):
    """The embedded runtime failed to start."""

    def __init__(self, script_path: str, message: str):
        super().__init__(
            f"Embedded runtime failed to start from {script_path}: {message}",
            code=PkErrorEnum.FAILED_INITIALIZATION,
            category=ErrorCategory.FATAL,
        )


class RuntimeUnavailableError(DeopkgError):
    """No runtime instance is available to serve a job."""

    def __init__(self, reason: str):
        super().__init__(
            f"Embedded runtime unavailable: {reason}",
            code=PkErrorEnum.FAILED_INITIALIZATION,
            category=ErrorCategory.FATAL,
        )


class RuntimeCallError(DeopkgError):
    """A runtime function raised or returned data of the wrong shape."""

    def __init__(self, function: str, message: str, code: PkErrorEnum = PkErrorEnum.INTERNAL_ERROR):
        super().__init__(
            f"Runtime call '{function}' failed: {message}",
            code=code,
            category=ErrorCategory.RECOVERABLE,
        )
        self.function = function


class PackageIdInvalidError(DeopkgError):
    """Malformed or missing package id."""

    def __init__(self, package_id: str):
        super().__init__(
            f"Invalid package id: {package_id!r}",
            code=PkErrorEnum.PACKAGE_ID_INVALID,
            category=ErrorCategory.VALIDATION,
        )


class FilterInvalidError(DeopkgError):
    """Conflicting or unusable filter combination."""

    def __init__(self, message: str):
        super().__init__(message, code=PkErrorEnum.FILTER_INVALID, category=ErrorCategory.VALIDATION)


class PackageNotFoundError(DeopkgError):
    def __init__(self, name: str):
        super().__init__(
            f"Package not found: {name}",
            code=PkErrorEnum.PACKAGE_NOT_FOUND,
            category=ErrorCategory.NOT_FOUND,
        )


class RepoNotFoundError(DeopkgError):
    def __init__(self, repo_id: str):
        super().__init__(
            f"Repository not found: {repo_id}",
            code=PkErrorEnum.REPO_NOT_FOUND,
            category=ErrorCategory.NOT_FOUND,
        )


class RoleNotSupportedError(DeopkgError):
    def __init__(self, role: PkRoleEnum):
        super().__init__(
            f"Role not supported by this backend: {role.text}",
            code=PkErrorEnum.NOT_SUPPORTED,
            category=ErrorCategory.UNSUPPORTED,
        )


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"(https?://)[^/\s:@]+:[^/\s@]+@"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove credentials from error messages before they reach the host."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: BaseException) -> tuple[PkErrorEnum, ErrorCategory]:
    """
    Classify an exception onto a PackageKit error code.

    Returns:
        Tuple of (error_code, category)
    """
    if isinstance(exc, DeopkgError):
        return exc.code, exc.category

    if isinstance(exc, FileNotFoundError):
        return PkErrorEnum.FILE_NOT_FOUND, ErrorCategory.NOT_FOUND

    if isinstance(exc, PermissionError):
        return PkErrorEnum.NOT_AUTHORIZED, ErrorCategory.PERMISSION

    if isinstance(exc, MemoryError):
        return PkErrorEnum.OOM, ErrorCategory.FATAL

    if isinstance(exc, ConnectionError):
        return PkErrorEnum.NO_NETWORK, ErrorCategory.RECOVERABLE

    if isinstance(exc, NotImplementedError):
        return PkErrorEnum.NOT_SUPPORTED, ErrorCategory.UNSUPPORTED

    if isinstance(exc, OSError) and exc.errno == errno.ENOSPC:
        return PkErrorEnum.NO_SPACE_ON_DEVICE, ErrorCategory.FATAL

    return PkErrorEnum.INTERNAL_ERROR, ErrorCategory.FATAL


def job_error_message(exc: BaseException) -> str:
    """Message a failed job carries for ``exc``."""
    if isinstance(exc, DeopkgError):
        return sanitize_error_message(exc.message)
    text = sanitize_error_message(str(exc)) or exc.__class__.__name__
    return f"{exc.__class__.__name__}: {text}"
