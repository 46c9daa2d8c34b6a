from graph_worksheet import constants as C
from graph_worksheet.points import Point
from graph_worksheet.table import make_html_table, value_rows, value_table_html


def test_value_rows_round_for_display_only() -> None:
    pts = [Point(-1.0, 2 / 3), Point(2.0, 4.0)]
    header, values = value_rows(pts, "y = 2x")
    assert header == ["x", "-1", "2"]
    assert values == ["y = 2x", "0.667", "4"]
    # raw values untouched
    assert pts[0].y == 2 / 3


def test_value_rows_document_precision() -> None:
    _, values = value_rows([Point(1.0, 1 / 3)], "y", precision=C.DOCUMENT_PRECISION)
    assert values == ["y", "0.33"]


def test_make_html_table_escapes_values() -> None:
    out = make_html_table(["a<b"], [["&", 1]])
    assert out == (
        "<table><thead><tr><th>a&lt;b</th></tr></thead>"
        "<tbody><tr><td>&amp;</td><td>1</td></tr></tbody></table>"
    )


def test_value_table_html_has_caption_and_rows() -> None:
    html = value_table_html([Point(0.0, 0.0), Point(3.0, 6.0)], "y = 2x")
    assert "<figcaption>Value table</figcaption>" in html
    assert "<th>x</th><th>0</th><th>3</th>" in html
    assert "<td>y = 2x</td><td>0</td><td>6</td>" in html
