"""Process-wide owner of the embedded runtime.

UNINITIALIZED -> INITIALIZED -> DESTROYED. The runtime is started once and
torn down once; nothing else starts or stops it.
"""

from __future__ import annotations

import atexit
import threading
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from loguru import logger

from pkdeopkg.config.schema import BackendSettings
from pkdeopkg.runtime.bridge import BridgeModule
from pkdeopkg.runtime.interpreter import EmbeddedRuntime
from pkdeopkg.utils.exceptions import LifecycleError, RuntimeStartError, RuntimeUnavailableError

_singleton_lock = threading.Lock()
_singleton: "RuntimeLifecycle | None" = None

RuntimeFactory = Callable[[Path, BridgeModule], EmbeddedRuntime]


class LifecycleState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    DESTROYED = "destroyed"


class RuntimeLifecycle:
    """Owns the single EmbeddedRuntime and its bridge module."""

    def __init__(self, runtime_factory: RuntimeFactory = EmbeddedRuntime):
        self._runtime_factory = runtime_factory
        self._lock = threading.Lock()
        self.state = LifecycleState.UNINITIALIZED
        self.failure: RuntimeStartError | None = None
        self.bridge: BridgeModule | None = None
        self._runtime: EmbeddedRuntime | None = None

    def initialize(self, settings: BackendSettings) -> None:
        with self._lock:
            if self.state is not LifecycleState.UNINITIALIZED or self.failure is not None:
                logger.warning("Runtime initialize called again in state {}; ignoring", self.state.value)
                return
            bridge = BridgeModule(settings.bridge_module)
            try:
                bridge.register()
            except LifecycleError as exc:
                self.failure = RuntimeStartError(str(settings.script_path), str(exc))
                logger.error("{}", self.failure.message)
                return
            try:
                runtime = self._runtime_factory(settings.script_path, bridge)
                runtime.start()
            except RuntimeStartError as exc:
                bridge.unregister()
                self.failure = exc
                logger.error("{}", exc.message)
                return
            except Exception as exc:
                bridge.unregister()
                self.failure = RuntimeStartError(str(settings.script_path), f"{exc.__class__.__name__}: {exc}")
                logger.exception("Embedded runtime failed to start")
                return
            self.bridge = bridge
            self._runtime = runtime
            self.state = LifecycleState.INITIALIZED
            atexit.register(self._destroy_at_exit)

    def destroy(self) -> None:
        with self._lock:
            if self.state is not LifecycleState.INITIALIZED:
                raise LifecycleError(f"cannot destroy runtime in state {self.state.value}")
            atexit.unregister(self._destroy_at_exit)
            try:
                if self._runtime is not None:
                    self._runtime.stop()
            finally:
                if self.bridge is not None:
                    self.bridge.unregister()
                self._runtime = None
                self.state = LifecycleState.DESTROYED
            logger.info("Embedded runtime destroyed")

    def record_failure(self, failure: RuntimeStartError) -> None:
        """Mark start as failed before the runtime was attempted; later jobs report ``failure``."""
        with self._lock:
            if self.state is not LifecycleState.UNINITIALIZED or self.failure is not None:
                logger.warning("Ignoring start failure in state {}: {}", self.state.value, failure.message)
                return
            self.failure = failure
            logger.error("{}", failure.message)

    def runtime(self) -> EmbeddedRuntime:
        if self.state is LifecycleState.INITIALIZED and self._runtime is not None:
            return self._runtime
        if self.failure is not None:
            raise RuntimeUnavailableError(self.failure.message)
        raise RuntimeUnavailableError(f"runtime is {self.state.value}")

    def _destroy_at_exit(self) -> None:
        if self.state is LifecycleState.INITIALIZED:
            self.destroy()


def get_runtime_lifecycle() -> RuntimeLifecycle:
    """Get or create the process-global runtime lifecycle."""
    global _singleton
    with _singleton_lock:
        if _singleton is None:
            _singleton = RuntimeLifecycle()
        return _singleton
