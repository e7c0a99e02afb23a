"""Debug logging for packedbits.

Construction, slicing and concatenation log through child loggers of
"packedbits" once logging is switched on, either with `enable(True)` or by
setting PACKEDBITS_DEBUG to one of 1/true/yes/on (case-insensitive).
Single-bit access and the bulk operations never log.

While off, the "packedbits" logger sits at CRITICAL and carries no handler
of ours.  Switching on attaches exactly one stream handler, tagged so that
repeated calls can find it again.
"""

from __future__ import annotations

import logging
import os
import threading

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"
ENV_VAR = "PACKEDBITS_DEBUG"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_ROOT = "packedbits"
_LOCK = threading.Lock()


def _env_flag(name: str) -> bool:
    """True when env var `name` holds a recognised "on" word."""
    return os.getenv(name, "").strip().lower() in _TRUTHY


_ENABLED = _env_flag(ENV_VAR)


def _own_handler(lg: logging.Logger):
    for h in lg.handlers:
        if getattr(h, "_packedbits", False):
            return h
    return None


def _apply_state(level: int) -> None:
    lg = logging.getLogger(_ROOT)
    lg.propagate = False
    if not _ENABLED:
        lg.setLevel(logging.CRITICAL)
        return
    if _own_handler(lg) is None:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        h._packedbits = True
        lg.addHandler(h)
    lg.setLevel(level)


def enable(flag: bool = True, *, level: int = logging.DEBUG) -> None:
    """Switch packedbits debug logging on or off."""
    global _ENABLED
    with _LOCK:
        _ENABLED = bool(flag)
        _apply_state(level)


def is_enabled() -> bool:
    return _ENABLED


def dbg(name: str) -> logging.Logger:
    """Logger for `name` under the packedbits namespace."""
    if _own_handler(logging.getLogger(_ROOT)) is None:
        with _LOCK:
            _apply_state(logging.DEBUG)
    return logging.getLogger(f"{_ROOT}.{name}")


def preview(bits: str, n: int = 32) -> str:
    # keep the head and tail of long renderings
    if len(bits) <= n:
        return bits
    half = n // 2
    return f"{bits[:half]}...{bits[-half:]} (n={len(bits)})"


__all__ = ["LOG_FORMAT", "DATE_FORMAT", "ENV_VAR", "enable", "is_enabled", "dbg", "preview"]
