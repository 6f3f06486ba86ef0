from __future__ import annotations
import logging
import os


_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_ENCODING = "utf-8"
_DEFAULT_RECURSION_LIMIT = 50_000
_FALSY = {"0", "false", "no", "off"}


def flag_from_env(var: str, default: bool) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSY


def get_log_level() -> int:
    raw = os.environ.get("LOX_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def color_enabled(stream) -> bool:
    if "NO_COLOR" in os.environ:
        return False
    if not flag_from_env("LOX_COLOR", True):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def get_source_encoding() -> str:
    return os.environ.get("LOX_SOURCE_ENCODING") or _DEFAULT_ENCODING


def get_recursion_limit() -> int:
    """Python frame limit while a Lox program runs (several frames per Lox call)."""
    raw = os.environ.get("LOX_RECURSION_LIMIT", "").strip()
    return int(raw) if raw.isdigit() else _DEFAULT_RECURSION_LIMIT
