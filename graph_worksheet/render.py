"""Graph rendering helpers: apply a :class:`~graph_worksheet.layout.RenderPlan` with matplotlib."""
from __future__ import annotations

import io
import logging
import os
import tempfile
import warnings
from pathlib import Path
from typing import Any

from . import constants as C
from .functions import format_number
from .layout import RenderPlan

__all__ = ["render_plan", "render_png", "DPI"]

logger = logging.getLogger(__name__)

# 6in × 100dpi = the 600px canvas the layout engine targets.
DPI = 100


def _select_backend() -> None:
    """Pick a usable matplotlib backend on demand (Agg when headless)."""
    import matplotlib  # type: ignore

    try:
        backend = matplotlib.get_backend().lower()
    except Exception:
        backend = ""
    if backend in {"agg", "tkagg"}:
        return
    env_backend = os.environ.get("MPLBACKEND", "").lower()
    prefer_tk = bool(os.environ.get("DISPLAY")) or env_backend == "tkagg"
    if prefer_tk:
        try:
            matplotlib.use("TkAgg")
        except Exception as exc:  # pragma: no cover - depends on system backend
            warnings.warn(
                f"Preferred GUI backend 'TkAgg' unavailable; falling back to 'Agg': {exc}",
                RuntimeWarning,
            )
            matplotlib.use("Agg")
    else:
        matplotlib.use("Agg")


def _ticks(lower: float, upper: float) -> list[float]:
    from matplotlib.ticker import MaxNLocator  # type: ignore

    locator = MaxNLocator(nbins=C.TICK_COUNT, steps=[1, 2, 5, 10])
    return [round(float(t), 10) for t in locator.tick_values(lower, upper) if lower <= t <= upper]


def _draw(plan: RenderPlan) -> Any:
    """Build the figure for *plan*; the caller owns (and must close) it."""
    _select_backend()
    import matplotlib.pyplot as plt  # type: ignore
    import numpy as np  # type: ignore
    from matplotlib import patheffects  # type: ignore

    size_in = C.CANVAS_SIZE / DPI
    fig = plt.figure(figsize=(size_in, size_in), dpi=DPI, facecolor="white")
    # One axes spanning the whole canvas; limits are the pixel edges mapped back
    # to data so the plot area sits inside the layout's margins.
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_axis_off()
    sx, sy = plan.scale.x, plan.scale.y
    ax.set_xlim(sx.invert(0), sx.invert(C.CANVAS_SIZE))
    ax.set_ylim(sy.invert(C.CANVAS_SIZE), sy.invert(0))
    px = sx.invert(C.MARGIN + 1) - sx.invert(C.MARGIN)

    lo, hi = plan.domain.lower, plan.domain.upper
    ticks = _ticks(lo, hi)

    # --- faint grid ---
    ax.vlines(ticks, lo, hi, colors=C.GRID_COLOR, linewidth=1, zorder=0)
    ax.hlines(ticks, lo, hi, colors=C.GRID_COLOR, linewidth=1, zorder=0)

    # --- axes with arrowheads ---
    arrow = {"arrowstyle": "-|>", "color": "black", "lw": 1.5, "shrinkA": 0, "shrinkB": 0}
    ax.annotate("", xy=(hi, 0), xytext=(lo, 0), arrowprops=arrow, zorder=2)
    ax.annotate("", xy=(0, hi), xytext=(0, lo), arrowprops=arrow, zorder=2)

    # --- tick marks and labels (0 is labelled once at the origin) ---
    for t in ticks:
        if t == 0:
            continue
        ax.plot([t, t], [0, -5 * px], color="black", linewidth=1, zorder=2)
        ax.text(t, -10 * px, format_number(t), ha="center", va="top", fontsize=9)
        ax.plot([0, -5 * px], [t, t], color="black", linewidth=1, zorder=2)
        ax.text(-10 * px, t, format_number(t), ha="right", va="center", fontsize=9)

    ax.text(hi, 10 * px, "x", ha="right", va="bottom", fontweight="bold")
    ax.text(15 * px, hi, "y", ha="left", va="top", fontweight="bold")
    ax.text(-12 * px, -15 * px, "0", ha="left", va="baseline", fontsize=9)

    # --- curve ---
    samples = list(plan.samples)
    xs = np.fromiter((p.x for p in samples), dtype=float, count=len(samples))
    ys = np.fromiter((p.y for p in samples), dtype=float, count=len(samples))
    ax.plot(xs, ys, color=C.CURVE_COLOR, linewidth=C.CURVE_WIDTH, zorder=3)

    # --- projection guides ---
    for seg in plan.projections:
        ax.plot(
            [seg.start.x, seg.end.x],
            [seg.start.y, seg.end.y],
            color=C.GUIDE_COLOR,
            linewidth=1,
            linestyle=(0, (4, 4)),
            zorder=3,
        )

    # --- point markers ---
    marker_area = (2 * C.POINT_RADIUS * 72 / DPI) ** 2
    ax.scatter(
        [p.x for p in plan.points],
        [p.y for p in plan.points],
        s=marker_area,
        color=C.CURVE_COLOR,
        edgecolors="white",
        linewidths=1,
        zorder=4,
    )

    # --- function label ---
    if plan.label_anchor is not None:
        ax.annotate(
            plan.label,
            xy=(plan.label_anchor.x, plan.label_anchor.y),
            xytext=(C.LABEL_OFFSET_PX, 0),
            textcoords="offset pixels",
            ha="left",
            va="center",
            fontsize=10,
            fontweight="bold",
            color=C.CURVE_COLOR,
            path_effects=[patheffects.withStroke(linewidth=3, foreground="white")],
            zorder=5,
        )
    else:
        logger.debug("no visible curve sample; omitting label %r", plan.label)

    return fig


def render_png(plan: RenderPlan) -> bytes:
    """Rasterize *plan* to PNG bytes (600×600 pixels)."""
    import matplotlib.pyplot as plt  # type: ignore

    fig = _draw(plan)
    try:
        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=DPI, facecolor="white")
    finally:
        plt.close(fig)
    return buf.getvalue()


def render_plan(plan: RenderPlan, path: str | Path | None = None) -> str:
    """Render *plan* to a **PNG file** and return its path.

    Without *path* a temporary file is created; the caller removes it.
    """
    if path is None:
        fd, tmp = tempfile.mkstemp(suffix=".png")
        os.close(fd)
        path = tmp
    png_path = Path(path)
    png_path.write_bytes(render_png(plan))
    logger.info("graph written to %s", png_path)
    return str(png_path)
