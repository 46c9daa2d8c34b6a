"""Parsing of user-typed numbers (plain decimals or ``p/q`` fractions)."""
from __future__ import annotations

import math
import re

__all__ = ["parse_number", "ValidationError"]

_DECIMAL = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_NUMBER_RE = re.compile(rf"^\s*({_DECIMAL})\s*$")
_FRACTION_RE = re.compile(rf"^\s*({_DECIMAL})\s*/\s*({_DECIMAL})\s*$")


class ValidationError(ValueError):
    """User input that blocks a calculation; ``str(exc)`` is user-facing."""


def parse_number(text: str | None) -> float | None:
    """Return the value of *text* or ``None`` when it is unparseable.

    Accepts ``"2"``, ``"-0.75"``, ``"1/2"`` and ``"-3/4"``. A zero denominator,
    an empty string, or anything else yields ``None``. Fractions are reduced
    exactly with SymPy before conversion so ``"1/3"`` is the nearest float to
    one third.
    """
    if text is None:
        return None
    m = _FRACTION_RE.match(text)
    if m:
        import sympy as sp

        num = sp.Rational(m.group(1))
        den = sp.Rational(m.group(2))
        if den == 0:
            return None
        value = float(num / den)
    else:
        m = _NUMBER_RE.match(text)
        if not m:
            return None
        value = float(m.group(1))
    if not math.isfinite(value):
        return None
    return value
