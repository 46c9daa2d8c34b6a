"""Coordinate mapping and function sampling for the plot.

:func:`layout` is a pure transform from a function descriptor and its point
set to a :class:`RenderPlan`. The renderer only applies the plan; nothing in
here touches matplotlib or keeps state between calls.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from . import constants as C
from .functions import FunctionDescriptor, evaluate, function_label
from .points import Point

__all__ = [
    "Domain",
    "LinearScale",
    "ScaleTransform",
    "CurveSamples",
    "Segment",
    "RenderPlan",
    "derive_domain",
    "scale_transform",
    "projection_segments",
    "select_label_anchor",
    "layout",
]


@dataclass(frozen=True, slots=True)
class Domain:
    """Symmetric interval ``[-m, m]`` shared by both axes."""

    m: float

    @property
    def lower(self) -> float:
        return -self.m

    @property
    def upper(self) -> float:
        return self.m


@dataclass(frozen=True, slots=True)
class LinearScale:
    """Affine map from ``domain`` to ``range``; either may be descending."""

    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        t = (value - d0) / (d1 - d0)
        return r0 * (1 - t) + r1 * t

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        t = (pixel - r0) / (r1 - r0)
        return d0 * (1 - t) + d1 * t


@dataclass(frozen=True, slots=True)
class ScaleTransform:
    x: LinearScale
    y: LinearScale


@dataclass(frozen=True, slots=True)
class CurveSamples:
    """Lazy, restartable samples ``start + i*step`` for ``start <= x < stop``.

    Iterating twice yields the same sequence; nothing is cached.
    """

    descriptor: FunctionDescriptor
    start: float
    stop: float
    step: float = C.SAMPLE_STEP

    def __len__(self) -> int:
        return max(0, math.ceil((self.stop - self.start) / self.step))

    def __iter__(self) -> Iterator[Point]:
        for i in range(len(self)):
            x = self.start + i * self.step
            yield Point(x, evaluate(self.descriptor, x))


@dataclass(frozen=True, slots=True)
class Segment:
    start: Point
    end: Point


@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Everything the renderer needs to draw one calculation."""

    descriptor: FunctionDescriptor
    points: tuple[Point, ...]
    domain: Domain
    scale: ScaleTransform
    samples: CurveSamples
    projections: tuple[Segment, ...]
    label: str
    label_anchor: Point | None


def derive_domain(points: Sequence[Point]) -> Domain:
    if not points:
        raise ValueError("Cannot lay out an empty point set")
    x_max = max(abs(p.x) for p in points)
    y_max = max(abs(p.y) for p in points)
    return Domain(max(x_max, y_max) + C.DOMAIN_PADDING)


def scale_transform(domain: Domain) -> ScaleTransform:
    bounds = (domain.lower, domain.upper)
    x = LinearScale(bounds, (C.MARGIN, C.CANVAS_SIZE - C.MARGIN))
    y = LinearScale(bounds, (C.CANVAS_SIZE - C.MARGIN, C.MARGIN))
    return ScaleTransform(x, y)


def projection_segments(points: Iterable[Point]) -> tuple[Segment, ...]:
    """Dashed guides from each off-axis point down to the x axis and across to the y axis."""
    segments: list[Segment] = []
    for p in points:
        # Points on an axis would draw guides on top of the axis itself.
        if p.x == 0 or p.y == 0:
            continue
        segments.append(Segment(Point(p.x, 0.0), p))
        segments.append(Segment(Point(0.0, p.y), p))
    return tuple(segments)


def select_label_anchor(samples: Iterable[Point], y_scale: LinearScale) -> Point | None:
    """Pick the curve sample about 10% in from the rightmost visible one.

    Returns ``None`` when no sample lies inside the vertical label band.
    """
    low, high = C.LABEL_BAND
    visible = [p for p in samples if low < y_scale(p.y) < high]
    if not visible:
        return None
    visible.sort(key=lambda p: p.x, reverse=True)
    return visible[math.floor(len(visible) * C.LABEL_INSET)]


def layout(descriptor: FunctionDescriptor, points: Sequence[Point]) -> RenderPlan:
    domain = derive_domain(points)
    scale = scale_transform(domain)
    samples = CurveSamples(descriptor, domain.lower, domain.upper)
    return RenderPlan(
        descriptor=descriptor,
        points=tuple(points),
        domain=domain,
        scale=scale,
        samples=samples,
        projections=projection_segments(points),
        label=function_label(descriptor),
        label_anchor=select_label_anchor(samples, scale.y),
    )
