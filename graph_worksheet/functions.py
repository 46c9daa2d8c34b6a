"""Function families plotted by the worksheet.

The three supported families are modelled as a tagged variant: each family is
its own frozen dataclass and every consumer dispatches with an exhaustive
``match`` so that adding a family forces every helper below to handle it.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

__all__ = [
    "Origin",
    "Affine",
    "Quadratic",
    "FunctionDescriptor",
    "FAMILIES",
    "evaluate",
    "format_number",
    "function_label",
    "document_title",
]


@dataclass(frozen=True, slots=True)
class Origin:
    """y = a·x"""

    a: float


@dataclass(frozen=True, slots=True)
class Affine:
    """y = a·x + b"""

    a: float
    b: float


@dataclass(frozen=True, slots=True)
class Quadratic:
    """y = a·x²"""

    a: float


FunctionDescriptor = Union[Origin, Affine, Quadratic]

# CLI / form names for each family.
FAMILIES: dict[str, type] = {
    "origin": Origin,
    "affine": Affine,
    "quadratic": Quadratic,
}


def _unknown(descriptor: object) -> TypeError:
    return TypeError(f"Unsupported function descriptor: {descriptor!r}")


def evaluate(descriptor: FunctionDescriptor, x: float) -> float:
    """Return y for *x*; total over the reals for every family."""
    match descriptor:
        case Origin(a=a):
            return a * x
        case Affine(a=a, b=b):
            return a * x + b
        case Quadratic(a=a):
            return a * x * x
        case _:
            raise _unknown(descriptor)


def format_number(value: float) -> str:
    """Shortest positional form of *value*: ``2`` not ``2.0``, ``0.00001`` not ``1e-05``."""
    if not math.isfinite(value):
        return repr(float(value))
    if float(value).is_integer():
        return str(int(value))
    import numpy as np

    return np.format_float_positional(float(value), trim="-")


def function_label(descriptor: FunctionDescriptor) -> str:
    """Formula text drawn next to the curve and used as the table's y label."""
    match descriptor:
        case Origin(a=a):
            return f"y = {format_number(a)}x"
        case Affine(a=a, b=b):
            sign = "+" if b >= 0 else "-"
            return f"y = {format_number(a)}x {sign} {format_number(abs(b))}"
        case Quadratic(a=a):
            return f"y = {format_number(a)}x²"
        case _:
            raise _unknown(descriptor)


def document_title(descriptor: FunctionDescriptor) -> str:
    """Title line of the exported document; negative ``b`` is parenthesised."""
    match descriptor:
        case Affine(a=a, b=b):
            b_text = format_number(b) if b >= 0 else f"({format_number(b)})"
            return f"Function: y = {format_number(a)}x + {b_text}"
        case Origin() | Quadratic():
            return f"Function: {function_label(descriptor)}"
        case _:
            raise _unknown(descriptor)
