"""Backend settings using pydantic-settings.

Values come from ``DEOPKG_*`` environment variables, overlaid by the
``[Deopkg]`` section of the daemon's key file when one is present.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "eopkg_api.py"

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class BackendSettings(BaseSettings):
    """Settings for the deopkg backend."""

    model_config = SettingsConfigDict(env_prefix="DEOPKG_", extra="ignore")

    script_path: Path = DEFAULT_SCRIPT_PATH  # Runtime script executed at initialize
    bridge_module: str = "deopkg"  # Module name runtime code imports to call back
    log_level: LogLevel = "INFO"
    log_file: Path | None = None  # Rotating file sink, stderr only when unset
    download_dir: Path = Field(default_factory=lambda: Path("/var/cache/eopkg/packages"))

    @field_validator("bridge_module")
    @classmethod
    def _bridge_module_is_identifier(cls, value: str) -> str:
        name = value.strip()
        if not name.isidentifier():
            raise ValueError(f"bridge module name must be a python identifier: {value!r}")
        return name

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
