"""Public package interface for the function graph worksheet.

Importing this package gives you easy access to the top‑level helpers without
having to know the internal module layout.

Typical usage
-------------
>>> from graph_worksheet import calculate, layout
>>> calc = calculate("affine", a="-1", b="2", x1="3", x2="-1")
>>> plan = layout(calc.descriptor, calc.points)
"""
from importlib.metadata import version as _version  # type: ignore

from .functions import Affine, Origin, Quadratic, evaluate, function_label
from .layout import RenderPlan, layout
from .parsing import ValidationError, parse_number
from .points import Calculation, Point, calculate

__all__ = [
    "Affine",
    "Origin",
    "Quadratic",
    "evaluate",
    "function_label",
    "RenderPlan",
    "layout",
    "ValidationError",
    "parse_number",
    "Calculation",
    "Point",
    "calculate",
    "__version__",
]

try:
    __version__ = _version("graph_worksheet")
except Exception:  # pragma: no cover – package not installed yet
    __version__ = "0.0.0"
