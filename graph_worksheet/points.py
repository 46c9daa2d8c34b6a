"""Point-set construction: turn raw form inputs into a validated calculation."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from . import constants as C
from .functions import FAMILIES, Affine, FunctionDescriptor, Origin, Quadratic, evaluate
from .parsing import ValidationError, parse_number

__all__ = ["Point", "Calculation", "build_points", "calculate"]

logger = logging.getLogger(__name__)

MSG_INVALID_A = "Please enter a valid coefficient a (decimal or fraction, e.g. 1/2)."
MSG_INVALID_B = "Please enter a valid coefficient b."
MSG_INVALID_X = "Please enter a valid x value."
MSG_MISSING_XS = "Please enter both x1 and x2."
MSG_DISTINCT_XS = "Please enter two different x values."
MSG_OUT_OF_RANGE = (
    f"Values are too large to plot; keep x and y within ±{C.MAX_COORDINATE:g}."
)


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Calculation:
    """One finished calculation request: the descriptor and its point set."""

    descriptor: FunctionDescriptor
    points: tuple[Point, ...]


def build_points(
    descriptor: FunctionDescriptor,
    x1: float | None = None,
    x2: float | None = None,
) -> tuple[Point, ...]:
    """Apply the per-family sampling policy to already parsed x values."""

    def at(x: float) -> Point:
        return Point(x, evaluate(descriptor, x))

    points: tuple[Point, ...]
    match descriptor:
        case Origin():
            if x1 is None:
                raise ValidationError(MSG_INVALID_X)
            points = (Point(0.0, 0.0), at(x1))
        case Affine():
            if x1 is None or x2 is None:
                raise ValidationError(MSG_MISSING_XS)
            if x1 == x2:
                raise ValidationError(MSG_DISTINCT_XS)
            points = tuple(sorted((at(x1), at(x2)), key=lambda p: p.x))
        case Quadratic():
            points = tuple(at(x) for x in C.QUADRATIC_XS)
        case _:
            raise TypeError(f"Unsupported function descriptor: {descriptor!r}")

    # Every coordinate finite and within the plot bound.
    for p in points:
        for v in (p.x, p.y):
            if not math.isfinite(v) or abs(v) > C.MAX_COORDINATE:
                raise ValidationError(MSG_OUT_OF_RANGE)
    return points


def calculate(
    family: str,
    a: str | None,
    b: str | None = None,
    x1: str | None = None,
    x2: str | None = None,
) -> Calculation:
    """Validate raw strings for *family* and build its point set.

    ``a`` is validated first regardless of family, then ``b`` (affine only),
    then the x values. Any failure raises :class:`ValidationError`.
    """
    try:
        kind = FAMILIES[family]
    except KeyError:
        raise ValueError(f"Unknown function family: {family!r}") from None

    a_val = parse_number(a)
    if a_val is None:
        raise ValidationError(MSG_INVALID_A)

    descriptor: FunctionDescriptor
    if kind is Affine:
        b_val = parse_number(b)
        if b_val is None:
            raise ValidationError(MSG_INVALID_B)
        descriptor = Affine(a_val, b_val)
    elif kind is Origin:
        descriptor = Origin(a_val)
    else:
        descriptor = Quadratic(a_val)

    points = build_points(descriptor, parse_number(x1), parse_number(x2))
    logger.debug("calculated %d points for %r", len(points), descriptor)
    return Calculation(descriptor, points)
