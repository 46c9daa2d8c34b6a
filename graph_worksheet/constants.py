"""Package‑wide constants and demo inputs."""

from typing import Any

# ---------------------------------------------------------------------------
# Canvas geometry (pixel units of the 600×600 plot)
# ---------------------------------------------------------------------------

CANVAS_SIZE = 600
MARGIN = 40
# Extra breathing room (data units) beyond the furthest sample point.
DOMAIN_PADDING = 2.0
SAMPLE_STEP = 0.1
# Largest |x| or |y| accepted in a point set; bounds the dense sample count.
MAX_COORDINATE = 1e4

# Label anchors must fall strictly inside this vertical pixel band.
LABEL_BAND = (MARGIN + 20, CANVAS_SIZE - MARGIN - 20)
# Fraction of visible samples skipped from the right edge when placing the label.
LABEL_INSET = 0.1
LABEL_OFFSET_PX = 10

QUADRATIC_XS: tuple[float, ...] = (-2.0, -1.0, 0.0, 1.0, 2.0)

# ---------------------------------------------------------------------------
# Styling
# ---------------------------------------------------------------------------

CURVE_COLOR = "#B22222"
CURVE_WIDTH = 2.5
GUIDE_COLOR = "#666666"
GRID_COLOR = "#e5e7eb"
POINT_RADIUS = 4
TICK_COUNT = 10

# ---------------------------------------------------------------------------
# Value table / document export
# ---------------------------------------------------------------------------

SCREEN_PRECISION = 3
DOCUMENT_PRECISION = 2
EXPORT_IMAGE_SIZE = 500
DEFAULT_DOCUMENT_NAME = "function_graph.docx"

DOCUMENT_HEADING = "FUNCTION GRAPH EXERCISE"
TABLE_CAPTION = "1. Value table:"
GRAPH_CAPTION = "2. Graph of the function:"
DOCUMENT_FOOTER = "Generated automatically by graph-worksheet."
TABLE_HEADING = "Value table"

EXPORT_FAILED_MESSAGE = "Could not create the document. Please try again."

# ---------------------------------------------------------------------------
# Demo inputs for the CLI (raw strings, as typed by a user)
# ---------------------------------------------------------------------------

DEMO_INPUTS: dict[str, dict[str, Any]] = {
    "origin": {"a": "2", "x1": "3"},
    "affine": {"a": "-1", "b": "2", "x1": "3", "x2": "-1"},
    "quadratic": {"a": "1/2"},
}

__all__ = [
    "CANVAS_SIZE",
    "MARGIN",
    "DOMAIN_PADDING",
    "SAMPLE_STEP",
    "MAX_COORDINATE",
    "LABEL_BAND",
    "LABEL_INSET",
    "LABEL_OFFSET_PX",
    "QUADRATIC_XS",
    "CURVE_COLOR",
    "CURVE_WIDTH",
    "GUIDE_COLOR",
    "GRID_COLOR",
    "POINT_RADIUS",
    "TICK_COUNT",
    "SCREEN_PRECISION",
    "DOCUMENT_PRECISION",
    "EXPORT_IMAGE_SIZE",
    "DEFAULT_DOCUMENT_NAME",
    "DOCUMENT_HEADING",
    "TABLE_CAPTION",
    "GRAPH_CAPTION",
    "DOCUMENT_FOOTER",
    "TABLE_HEADING",
    "EXPORT_FAILED_MESSAGE",
    "DEMO_INPUTS",
]
