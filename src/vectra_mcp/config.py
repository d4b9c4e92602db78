"""
Server configuration loaded from the process environment.

  VECTRA_API_URL             base URL of the Vectra API (default http://localhost:3000/api)
  VECTRA_API_KEY             API credential, required
  VECTRA_TIMEOUT             seconds allowed for one HTTP exchange (default 60)
  VECTRA_FORCE_SEARCH_MODE   vector | keyword | hybrid, overrides query_collection.searchMode
  VECTRA_FORCE_GRAPH_SEARCH  1/true/yes/on to always enable graph search
  VECTRA_ALLOWED_PATHS       os.pathsep-separated roots embed_files may read from
  VECTRA_LOG_LEVEL           logging level name (default INFO)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from .errors import ConfigError

DEFAULT_API_URL: Final[str] = "http://localhost:3000/api"
DEFAULT_TIMEOUT: Final[float] = 60.0
SEARCH_MODES: Final[tuple[str, ...]] = ("vector", "keyword", "hybrid")

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Immutable configuration shared by the client, the tools and the router."""

    api_url: str
    api_key: str
    timeout: float = DEFAULT_TIMEOUT
    force_search_mode: str | None = None
    force_graph_search: bool = False
    allowed_paths: tuple[str, ...] = ()
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read settings from *environ* (defaults to os.environ)."""
        env = os.environ if environ is None else environ

        api_key = env.get("VECTRA_API_KEY", "").strip()
        if not api_key:
            raise ConfigError("VECTRA_API_KEY environment variable is required")

        api_url = env.get("VECTRA_API_URL", "").strip() or DEFAULT_API_URL

        raw_timeout = env.get("VECTRA_TIMEOUT", "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigError(f"VECTRA_TIMEOUT must be a number, got {raw_timeout!r}") from e
        if timeout <= 0:
            raise ConfigError(f"VECTRA_TIMEOUT must be positive, got {raw_timeout!r}")

        force_mode = env.get("VECTRA_FORCE_SEARCH_MODE", "").strip().lower() or None
        if force_mode is not None and force_mode not in SEARCH_MODES:
            raise ConfigError(
                f"VECTRA_FORCE_SEARCH_MODE must be one of {', '.join(SEARCH_MODES)}, got {force_mode!r}"
            )

        allowed = env.get("VECTRA_ALLOWED_PATHS", "")
        allowed_paths = tuple(p for p in allowed.split(os.pathsep) if p.strip())

        return cls(
            api_url=api_url.rstrip("/"),
            api_key=api_key,
            timeout=timeout,
            force_search_mode=force_mode,
            force_graph_search=env.get("VECTRA_FORCE_GRAPH_SEARCH", "").strip().lower() in _TRUTHY,
            allowed_paths=allowed_paths,
            log_level=env.get("VECTRA_LOG_LEVEL", "").strip().upper() or "INFO",
        )
