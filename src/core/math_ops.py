"""Arithmetic helpers exposed to scripts."""

from __future__ import annotations


def add(a: float, b: float) -> float:
    """Return the arithmetic sum of ``a`` and ``b``."""

    return a + b
