"""Command‑line interface around :class:`graph_worksheet.session.WorksheetSession`."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from . import constants as C
from .export import ExportError
from .functions import FAMILIES
from .parsing import ValidationError
from .session import WorksheetResult, WorksheetSession
from .render import render_plan
from .table import value_rows

__all__ = ["main"]


def _preview_graph(path: str) -> None:
    """Display the generated graph PNG in a Matplotlib window (best‑effort)."""
    try:
        import numpy as np  # type: ignore
        from PIL import Image  # type: ignore
        import matplotlib.pyplot as plt  # imported lazily to avoid GUI deps
    except ImportError as exc:
        print(
            f"⚠️ Could not preview graph image; missing dependency: {exc}",
            file=sys.stderr,
        )
        return

    try:
        img = Image.open(path).convert("RGBA")
        arr = np.array(img)
        fig, ax = plt.subplots()
        ax.imshow(arr)
        ax.axis("off")
        plt.show()
    except Exception as exc:
        print(f"⚠️ Could not preview graph image: {exc}", file=sys.stderr)


def _parse_cli(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Value table, graph and worksheet for y = ax, y = ax + b, y = ax²",
        epilog="Negative fractions need the '=' form, e.g. -a=-3/4.",
    )
    parser.add_argument("family", choices=sorted(FAMILIES), help="Function family")
    parser.add_argument("-a", help="Coefficient a (decimal or fraction p/q)")
    parser.add_argument("-b", help="Coefficient b (affine only)")
    parser.add_argument("--x1", help="First x value (origin and affine)")
    parser.add_argument("--x2", help="Second x value (affine only)")
    parser.add_argument("--demo", action="store_true", help="Use the demo inputs for FAMILY")
    parser.add_argument("--png", help="Write the graph PNG to this path")
    parser.add_argument("--out", help=f"Write the worksheet document (e.g. {C.DEFAULT_DOCUMENT_NAME})")
    parser.add_argument("--html", action="store_true", help="Print the value table as HTML")
    parser.add_argument("--preview", action="store_true", help="Preview the graph PNG")
    parser.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level for graph_worksheet",
    )
    return parser.parse_args(argv)


def _summary(result: WorksheetResult) -> dict[str, Any]:
    plan = result.plan
    header, values = value_rows(result.calculation.points, plan.label)
    anchor = plan.label_anchor
    return {
        "function": plan.label,
        "points": [[p.x, p.y] for p in result.calculation.points],
        "table": {"header": header, "values": values},
        "domain": [plan.domain.lower, plan.domain.upper],
        "label_anchor": None if anchor is None else [anchor.x, anchor.y],
    }


def main(argv: list[str] | None = None) -> None:
    """Calculate, print the value table and write the requested PNG/DOCX files."""
    ns = _parse_cli(argv)

    logging.basicConfig(level=logging.WARNING)
    level = getattr(logging, ns.log_level)
    pkg_logger = logging.getLogger("graph_worksheet")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
    handler.setLevel(level)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)

    inputs: dict[str, Any] = {"a": ns.a, "b": ns.b, "x1": ns.x1, "x2": ns.x2}
    if ns.demo:
        inputs.update(C.DEMO_INPUTS[ns.family])

    session = WorksheetSession()
    try:
        result = session.calculate(ns.family, **inputs)
    except ValidationError as exc:
        sys.exit(f"Error: {exc}")

    png_path: str | None = None
    if ns.png or ns.preview:
        png_path = render_plan(result.plan, ns.png)
    if ns.preview and png_path:
        _preview_graph(png_path)

    if ns.out:
        try:
            saved = asyncio.run(session.export(ns.out))
        except ExportError as exc:
            sys.exit(f"Error: {exc}")
        print(f"✔ Worksheet written to {saved}", file=sys.stderr)

    if ns.html:
        print(result.table_html)
    else:
        print(json.dumps(_summary(result), ensure_ascii=False, separators=(",", ":")))


if __name__ == "__main__":  # pragma: no cover
    main()
