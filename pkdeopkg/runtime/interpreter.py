"""Embedded runtime hosting the eopkg script."""

from __future__ import annotations

import importlib.util
import inspect
import types
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from pkdeopkg.runtime.bridge import BridgeModule
from pkdeopkg.utils.exceptions import RuntimeCallError, RuntimeStartError

M = TypeVar("M", bound=BaseModel)


class EmbeddedRuntime:
    """Loads the runtime script as a private module and calls into it by name."""

    def __init__(self, script_path: Path, bridge: BridgeModule):
        self.script_path = Path(script_path)
        self.bridge = bridge
        self._module: types.ModuleType | None = None
        self._adapters: dict[type[BaseModel], TypeAdapter[Any]] = {}

    @property
    def started(self) -> bool:
        return self._module is not None

    def start(self) -> None:
        path = self.script_path.expanduser().resolve()
        if not path.is_file():
            raise RuntimeStartError(str(path), "script not found")
        module_name = f"{self.bridge.name}_runtime"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise RuntimeStartError(str(path), "failed to load module spec")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except (Exception, SystemExit) as exc:
            raise RuntimeStartError(str(path), f"{exc.__class__.__name__}: {exc}") from exc
        self._module = module
        logger.info("Embedded runtime started from {} ({} functions)", path, len(self.exports()))

    def stop(self) -> None:
        self._module = None
        self._adapters.clear()

    def exports(self) -> list[str]:
        if self._module is None:
            return []
        return sorted(
            name
            for name, value in vars(self._module).items()
            if not name.startswith("_") and inspect.isfunction(value) and value.__module__ == self._module.__name__
        )

    @contextmanager
    def bind(self, sink: Any) -> Iterator[None]:
        with self.bridge.bind(sink):
            yield

    def call(self, function: str, *args: Any) -> Any:
        if self._module is None:
            raise RuntimeCallError(function, "runtime is not started")
        target = getattr(self._module, function, None)
        if not callable(target):
            raise RuntimeCallError(function, "function not exported by runtime script")
        logger.debug("Runtime call {}({})", function, ", ".join(repr(a) for a in args))
        try:
            return target(*args)
        except (Exception, SystemExit) as exc:
            raise RuntimeCallError(function, f"{exc.__class__.__name__}: {exc}") from exc

    def call_records(self, function: str, model: type[M], *args: Any) -> list[M]:
        """Call ``function`` and validate the result as an ordered sequence of ``model``."""
        result = self.call(function, *args)
        if result is None or isinstance(result, (str, bytes, Mapping)):
            raise RuntimeCallError(function, f"expected a sequence of records, got {type(result).__name__}")
        try:
            rows = list(result)
        except TypeError as exc:
            raise RuntimeCallError(function, f"expected a sequence of records, got {type(result).__name__}") from exc
        except (Exception, SystemExit) as exc:
            raise RuntimeCallError(function, f"{exc.__class__.__name__}: {exc}") from exc
        adapter = self._adapters.get(model)
        if adapter is None:
            adapter = TypeAdapter(list[model])
            self._adapters[model] = adapter
        try:
            return adapter.validate_python([_as_mapping(row) for row in rows])
        except ValidationError as exc:
            raise RuntimeCallError(
                function, f"malformed {model.__name__} data: {exc.error_count()} validation error(s)"
            ) from exc


def _as_mapping(row: Any) -> Any:
    if isinstance(row, BaseModel):
        return row.model_dump()
    return row
