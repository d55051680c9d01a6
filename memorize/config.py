# memorize/config.py
from __future__ import annotations
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

DEFAULT_PAIRS = 4


@dataclass(frozen=True)
class Config:
    pairs: int = DEFAULT_PAIRS
    seed: Optional[int] = None


def _int_env(name: str, non_negative: bool = False) -> Optional[int]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if non_negative and value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


@lru_cache
def get_config() -> Config:
    pairs = _int_env("MEMORIZE_PAIRS", non_negative=True)
    return Config(
        pairs=DEFAULT_PAIRS if pairs is None else pairs,
        seed=_int_env("MEMORIZE_SEED"),
    )
