from __future__ import annotations

import os
import sys
from typing import Optional

_TRUTHY = ('1', 'true', 'yes', 'on')
_debug_override: Optional[bool] = None


def env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


def env_seed() -> Optional[int]:
    """Default RNG seed from PILESORT_SEED; unset or blank means a fresh random deal."""
    raw = os.getenv('PILESORT_SEED', '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'PILESORT_SEED must be an integer, got {raw!r}')


def set_debug(enabled: Optional[bool]) -> None:
    """Forces tracing on or off; None falls back to PILESORT_DEBUG."""
    global _debug_override
    _debug_override = enabled


def debug_enabled() -> bool:
    if _debug_override is not None:
        return _debug_override
    return env_flag('PILESORT_DEBUG')


def trace(tag: str, message: str) -> None:
    # stderr: stdout carries the instructions
    if debug_enabled():
        print(f'[{tag}] {message}', file=sys.stderr)


def env_max_cards() -> int:
    """Largest deck the web API will deal, from PILESORT_MAX_CARDS (default 10000)."""
    raw = os.getenv('PILESORT_MAX_CARDS', '10000').strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'PILESORT_MAX_CARDS must be an integer, got {raw!r}')
