"""Bridging module that runtime scripts import to call back into the backend."""

from __future__ import annotations

import sys
import types
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger

from pkdeopkg.enums import PkStatusEnum
from pkdeopkg.utils.exceptions import LifecycleError


class BridgeModule:
    """
    Owns the ``deopkg`` module object seen by runtime code.

    Runtime code calls ``deopkg.set_percentage(50)``; the call is forwarded to
    whichever job is bound at that moment and dropped when none is.
    """

    def __init__(self, name: str = "deopkg"):
        self.name = name
        self.module = self._build_module()
        self._sink: Any = None
        self.registered = False

    def _build_module(self) -> types.ModuleType:
        module = types.ModuleType(self.name, "Callbacks from the embedded runtime into the backend.")
        module.set_percentage = self.set_percentage
        module.set_status = self.set_status
        module.log = self.log
        module.__all__ = ["set_percentage", "set_status", "log"]
        return module

    def register(self) -> None:
        existing = sys.modules.get(self.name)
        if existing is not None and existing is not self.module:
            raise LifecycleError(f"module name already taken: {self.name}")
        sys.modules[self.name] = self.module
        self.registered = True
        logger.debug("Registered bridge module {}", self.name)

    def unregister(self) -> None:
        if sys.modules.get(self.name) is self.module:
            del sys.modules[self.name]
        self.registered = False

    @contextmanager
    def bind(self, sink: Any) -> Iterator[None]:
        previous = self._sink
        self._sink = sink
        try:
            yield
        finally:
            self._sink = previous

    def set_percentage(self, percent: int) -> None:
        if self._sink is None:
            return
        self._sink.set_percentage(max(0, min(100, int(percent))))

    def set_status(self, status: str | int) -> None:
        if self._sink is None:
            return
        if isinstance(status, str):
            value = PkStatusEnum.from_text(status)
        else:
            value = PkStatusEnum(int(status))
        self._sink.set_status(value)

    def log(self, message: str) -> None:
        logger.info("[runtime] {}", message)
