"""Utility helpers shared across the pipeline."""

from __future__ import annotations

import random
import re


_WS_RE = re.compile(r"\s+")


def collapse_whitespace(text: str, sep: str = " ") -> str:
    """Trim `text` and replace every whitespace run with `sep`."""
    return _WS_RE.sub(sep, (text or "").strip())


def jittered_delay(base_s: float, jitter_s: float) -> float:
    """Return `base_s` plus a uniform random extra in [0, jitter_s)."""
    return base_s + random.random() * jitter_s
