"""Value table helpers (display rounding and HTML rendering)."""
from __future__ import annotations

import html as _html
from typing import Any, Sequence

from . import constants as C
from .functions import format_number
from .points import Point

__all__ = ["value_rows", "make_html_table", "value_table_html"]


def _rounded(value: float, places: int) -> str:
    return format_number(round(value, places))


def value_rows(
    points: Sequence[Point],
    y_label: str,
    *,
    precision: int = C.SCREEN_PRECISION,
) -> tuple[list[str], list[str]]:
    """Return the ``x`` header row and the ``y`` row, rounded for display only."""
    header = ["x", *(format_number(p.x) for p in points)]
    values = [y_label, *(_rounded(p.y, precision) for p in points)]
    return header, values


def make_html_table(header: Sequence[Any], rows: Sequence[Sequence[Any]]) -> str:
    """Header + rows → ``<table>`` element string (values escaped)."""
    head_html = "".join(f"<th>{_html.escape(str(h))}</th>" for h in header)
    rows_html = "".join(
        "<tr>" + "".join(f"<td>{_html.escape(str(c))}</td>" for c in row) + "</tr>"
        for row in rows
    )
    return f"<table><thead><tr>{head_html}</tr></thead><tbody>{rows_html}</tbody></table>"


def value_table_html(points: Sequence[Point], y_label: str) -> str:
    header, values = value_rows(points, y_label)
    table = make_html_table(header, [values])
    return f"<figure><figcaption>{_html.escape(C.TABLE_HEADING)}</figcaption>{table}</figure>"
