import math

import pytest

from graph_worksheet import constants as C
from graph_worksheet.functions import Affine, Origin, Quadratic
from graph_worksheet.layout import (
    CurveSamples,
    Segment,
    derive_domain,
    layout,
    projection_segments,
    scale_transform,
    select_label_anchor,
)
from graph_worksheet.points import Point, build_points


def test_domain_is_padded_and_symmetric() -> None:
    domain = derive_domain([Point(0.0, 0.0), Point(3.0, 6.0)])
    assert domain.m == 8.0
    assert domain.lower == -domain.upper


def test_domain_uses_largest_magnitude_on_either_axis() -> None:
    domain = derive_domain([Point(-9.5, 1.0), Point(2.0, -3.0)])
    assert domain.m == 11.5


def test_domain_has_minimum_padding() -> None:
    assert derive_domain([Point(0.0, 0.0)]).m == 2.0


def test_empty_point_set_is_rejected() -> None:
    with pytest.raises(ValueError):
        derive_domain([])
    with pytest.raises(ValueError):
        layout(Origin(1.0), [])


def test_scale_maps_domain_into_margins() -> None:
    scale = scale_transform(derive_domain([Point(3.0, 6.0)]))
    assert scale.x(-8.0) == 40
    assert scale.x(8.0) == 560
    assert scale.x(0.0) == 300
    # vertical axis is inverted
    assert scale.y(8.0) == 40
    assert scale.y(-8.0) == 560
    assert scale.y(0.0) == 300
    assert scale.x.invert(0) == pytest.approx(-8.0 - 40 * 16 / 520)
    assert scale.y.invert(0) == pytest.approx(8.0 + 40 * 16 / 520)


def test_curve_samples_are_restartable() -> None:
    samples = CurveSamples(Origin(2.0), -8.0, 8.0)
    first = list(samples)
    second = list(samples)
    assert first == second
    assert len(first) == len(samples)
    assert first[0] == Point(-8.0, -16.0)
    assert all(-8.0 <= p.x < 8.0 for p in first)
    assert first[1].x == pytest.approx(-8.0 + C.SAMPLE_STEP)


def test_curve_samples_cover_domain_with_fixed_step() -> None:
    samples = list(CurveSamples(Quadratic(1.0), -4.0, 4.0))
    assert len(samples) == math.ceil(8.0 / C.SAMPLE_STEP)
    assert samples[-1].x == pytest.approx(4.0 - C.SAMPLE_STEP)


def test_projection_segments_skip_points_on_axes() -> None:
    segs = projection_segments([Point(0.0, 0.0), Point(3.0, 6.0), Point(2.0, 0.0), Point(0.0, 5.0)])
    assert segs == (
        Segment(Point(3.0, 0.0), Point(3.0, 6.0)),
        Segment(Point(0.0, 6.0), Point(3.0, 6.0)),
    )


def test_quadratic_projection_count() -> None:
    pts = build_points(Quadratic(0.5))
    assert len(projection_segments(pts)) == 8


def _visible(plan):  # type: ignore[no-untyped-def]
    low, high = C.LABEL_BAND
    return [p for p in plan.samples if low < plan.scale.y(p.y) < high]


def test_label_anchor_sits_ten_percent_in_from_the_right() -> None:
    pts = build_points(Origin(2.0), 3.0)
    plan = layout(Origin(2.0), pts)
    anchor = plan.label_anchor
    assert anchor is not None
    visible = _visible(plan)
    assert anchor in visible
    assert anchor.x < plan.domain.upper
    left_of_anchor = sum(1 for p in visible if p.x < anchor.x)
    assert left_of_anchor >= 0.8 * (len(visible) - 1)
    ordered = sorted(visible, key=lambda p: p.x, reverse=True)
    assert ordered[math.floor(len(ordered) * 0.1)] == anchor


def test_label_anchor_is_strictly_inside_band() -> None:
    plan = layout(Quadratic(1.0), build_points(Quadratic(1.0)))
    assert plan.label_anchor is not None
    low, high = C.LABEL_BAND
    assert low < plan.scale.y(plan.label_anchor.y) < high


def test_flat_line_still_gets_a_label() -> None:
    plan = layout(Origin(0.0), build_points(Origin(0.0), 4.0))
    assert plan.label_anchor is not None
    assert plan.label_anchor.y == 0.0


def test_no_visible_samples_means_no_label() -> None:
    desc = Affine(0.0, 100.0)
    plan = layout(desc, build_points(desc, 1.0, 2.0))
    assert plan.label_anchor is None
    assert plan.label == "y = 0x + 100"


def test_select_label_anchor_on_empty_samples() -> None:
    scale = scale_transform(derive_domain([Point(1.0, 1.0)]))
    assert select_label_anchor([], scale.y) is None


def test_layout_is_idempotent() -> None:
    desc = Affine(-1.0, 2.0)
    pts = build_points(desc, 3.0, -1.0)
    first = layout(desc, pts)
    second = layout(desc, pts)
    assert first == second
    assert list(first.samples) == list(second.samples)
    assert first.label == "y = -1x + 2"
    assert first.points == pts


def test_largest_accepted_point_set_keeps_sample_count_bounded() -> None:
    desc = Origin(1.0)
    plan = layout(desc, build_points(desc, C.MAX_COORDINATE))
    assert math.isfinite(plan.domain.m)
    assert len(plan.samples) <= math.ceil(2 * (C.MAX_COORDINATE + C.DOMAIN_PADDING) / C.SAMPLE_STEP)
    assert plan.label_anchor is not None
