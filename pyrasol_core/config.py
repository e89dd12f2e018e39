from __future__ import annotations

import os

DEFAULT_MAX_DEPTH = 60
MAX_WORKERS = 8


def env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def debug_enabled() -> bool:
    """Set PYRASOL_DEBUG=1 to print search progress."""
    return env_flag('PYRASOL_DEBUG')


def default_max_depth() -> int:
    return env_int('PYRASOL_MAX_DEPTH', DEFAULT_MAX_DEPTH)


def default_workers() -> int:
    return max(1, env_int('PYRASOL_WORKERS', min(os.cpu_count() or 1, MAX_WORKERS)))
