"""
Settings and store selection.

Values come from environment variables first, then from Streamlit secrets
(`.streamlit/secrets.toml`), e.g.

    SUPABASE_URL = "https://xyz.supabase.co"
    SUPABASE_KEY = "..."

or a `[supabase]` section with `url` / `key`.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

import streamlit as st

from life_os.db import DB_PATH_DEFAULT, SqliteHabitStore
from life_os.store import HabitStore
from life_os.supabase_store import SupabaseHabitStore

BACKEND_SUPABASE = "supabase"
BACKEND_SQLITE = "sqlite"

# setting -> (env vars, secrets paths)
_SOURCES = {
    "backend": (("LIFE_OS_BACKEND",), (("LIFE_OS_BACKEND",), ("life_os", "backend"))),
    "supabase_url": (("SUPABASE_URL",), (("SUPABASE_URL",), ("supabase", "url"))),
    "supabase_key": (
        ("SUPABASE_KEY", "SUPABASE_ANON_KEY"),
        (("SUPABASE_KEY",), ("SUPABASE_ANON_KEY",), ("supabase", "key")),
    ),
    "db_path": (("LIFE_OS_DB_PATH",), (("LIFE_OS_DB_PATH",), ("life_os", "db_path"))),
    "log_level": (("LIFE_OS_LOG_LEVEL",), (("LIFE_OS_LOG_LEVEL",), ("life_os", "log_level"))),
}


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Settings:
    backend: str = BACKEND_SQLITE
    supabase_url: str = ""
    supabase_key: str = ""
    db_path: str = DB_PATH_DEFAULT
    log_level: str = "INFO"


def _streamlit_secrets() -> Mapping[str, Any]:
    return st.secrets


def _read_secret(secrets: Mapping[str, Any], path: Sequence[str]) -> str:
    current: Any = secrets
    for key in path:
        try:
            if key not in current:
                return ""
            current = current[key]
        except FileNotFoundError:
            # no secrets.toml
            return ""
    return str(current).strip() if current is not None else ""


def _lookup(name: str, environ: Mapping[str, str], secrets: Mapping[str, Any]) -> str:
    env_keys, secret_paths = _SOURCES[name]
    for key in env_keys:
        value = (environ.get(key) or "").strip()
        if value:
            return value
    for path in secret_paths:
        value = _read_secret(secrets, path)
        if value:
            return value
    return ""


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    secrets: Optional[Mapping[str, Any]] = None,
) -> Settings:
    environ = os.environ if environ is None else environ
    secrets = _streamlit_secrets() if secrets is None else secrets

    url = _lookup("supabase_url", environ, secrets)
    key = _lookup("supabase_key", environ, secrets)
    backend = _lookup("backend", environ, secrets).lower()
    if not backend:
        backend = BACKEND_SUPABASE if (url and key) else BACKEND_SQLITE

    if backend not in (BACKEND_SUPABASE, BACKEND_SQLITE):
        raise ConfigError(f"Unknown backend '{backend}'. Use 'supabase' or 'sqlite'.")
    if backend == BACKEND_SUPABASE and not (url and key):
        raise ConfigError("Supabase backend needs SUPABASE_URL and SUPABASE_KEY.")

    return Settings(
        backend=backend,
        supabase_url=url,
        supabase_key=key,
        db_path=_lookup("db_path", environ, secrets) or DB_PATH_DEFAULT,
        log_level=(_lookup("log_level", environ, secrets) or "INFO").upper(),
    )


def make_store(settings: Settings) -> HabitStore:
    if settings.backend == BACKEND_SUPABASE:
        return SupabaseHabitStore.from_credentials(settings.supabase_url, settings.supabase_key)
    return SqliteHabitStore(settings.db_path)


def setup_logging(level: str = "INFO") -> logging.Logger:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logging.getLogger("life_os")
