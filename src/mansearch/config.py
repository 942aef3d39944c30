"""Configuration for mansearch.

Two layers are involved:

* `AppSettings` holds process-level knobs read from `MANSEARCH_*` environment
  variables and `.env` (config path, index name, pager, log level).
* `Config` is the persisted per-user JSON document describing how to reach the
  search engine. It is created once with defaults by `ensure_default()` and
  loaded strictly by `load_config()`; a missing key is fatal.
"""
from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from mansearch.exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "mansearch" / "config.json"


def _default_pager() -> str:
    return os.environ.get("PAGER") or "less"


class ElasticsearchConfig(BaseModel):
    """Search engine connection values."""

    host: str
    port: str
    search_results_size: int

    @property
    def base_url(self) -> str:
        host = self.host if "://" in self.host else f"http://{self.host}"
        return f"{host.rstrip('/')}:{self.port}"


class Config(BaseModel):
    """Persisted configuration document."""

    elasticsearch: ElasticsearchConfig


DEFAULT_CONFIG = Config(
    elasticsearch=ElasticsearchConfig(host="localhost", port="9200", search_results_size=10)
)


class AppSettings(BaseSettings):
    """Process-level settings loaded from environment variables and .env only."""

    model_config = SettingsConfigDict(
        env_prefix="MANSEARCH_",
        env_file=".env",
        extra="ignore",
    )

    config_path: Path = DEFAULT_CONFIG_PATH
    index_name: str = "manpages"
    log_level: str = "WARNING"
    pager: str = Field(default_factory=_default_pager)
    timeout: float = 30.0


def load_settings() -> AppSettings:
    """Load settings from environment variables and .env only."""
    return AppSettings()  # type: ignore[call-arg]


def ensure_default(path: Path = DEFAULT_CONFIG_PATH) -> bool:
    """Write the default configuration to `path` unless something is already there.

    Returns True when a new file was created.
    """
    path = Path(path)
    if path.exists():
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(DEFAULT_CONFIG.model_dump(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot write configuration to {path}: {exc}") from exc
    return True


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> Config:
    """Read and validate the configuration stored at `path`."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Configuration file not found: {path}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Configuration file {path} is not valid JSON: {exc}") from exc
    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        missing = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise ConfigurationError(f"Configuration file {path} is malformed: {missing}") from exc
