"""Application configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urljoin

DEFAULT_API_BASE_URL = "https://esa.instech.no"
DEFAULT_FLEET_PATH = "api/fleets/random"
DEFAULT_API_TIMEOUT_S = 5.0
DEFAULT_CELL_SIZE = 40
DEFAULT_ENV_FILES = (".env", ".env.local")


@dataclass(frozen=True, slots=True)
class ApiSettings:
    """Where and how to fetch fleet definitions."""

    base_url: str = DEFAULT_API_BASE_URL
    fleet_path: str = DEFAULT_FLEET_PATH
    timeout_s: float = DEFAULT_API_TIMEOUT_S

    @property
    def fleet_url(self) -> str:
        """Resolve the fleet endpoint against the base URL.

        An absolute ``fleet_path`` wins; a path starting with ``/`` is
        resolved from the host root; anything else is relative to the base.
        """
        base = self.base_url.rstrip("/") + "/"
        return urljoin(base, self.fleet_path.strip())


def parse_env_text(text: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines; blank lines, ``#`` comments and lines without a key are skipped."""
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("#"):
            continue
        key, separator, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if not separator or not key:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key] = value
    return values


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Copy the pairs from an env file into ``os.environ``; a missing file is ignored."""
    env_path = Path(path)
    if not env_path.is_file():
        return
    for key, value in parse_env_text(env_path.read_text(encoding="utf-8")).items():
        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files with optional local overrides.

    Paths are relative to the working directory and later files overwrite
    earlier ones. Defaults to ``.env`` then ``.env.local``.
    """
    to_load = tuple(paths) if paths is not None else DEFAULT_ENV_FILES
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def load_api_settings() -> ApiSettings:
    """Build fleet API settings from environment variables."""
    base_url = os.getenv("ANCHORAGE_API_BASE_URL", "").strip() or DEFAULT_API_BASE_URL
    fleet_path = os.getenv("ANCHORAGE_FLEET_PATH", "").strip() or DEFAULT_FLEET_PATH
    return ApiSettings(
        base_url=base_url,
        fleet_path=fleet_path,
        timeout_s=_env_float("ANCHORAGE_API_TIMEOUT_S", DEFAULT_API_TIMEOUT_S),
    )


def load_cell_size() -> int:
    """Pixels per grid cell used when translating drop points."""
    return _env_int("ANCHORAGE_CELL_SIZE", DEFAULT_CELL_SIZE)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return int(default)
    try:
        value = int(raw.strip())
    except ValueError:
        value = int(default)
    return max(1, value)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return float(default)
    try:
        value = float(raw.strip())
    except ValueError:
        return float(default)
    return value if value > 0.0 else float(default)

