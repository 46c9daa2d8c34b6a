"""Document export: rasterize → encode → embed → serialize → persist.

The stages run strictly in order through :class:`_Runner`; the first failing
stage stops the pipeline and nothing is written to the destination. Blocking
stages run in a worker thread, and :class:`DocumentExporter` holds a lock so
at most one export is in flight; later requests wait their turn.
"""
from __future__ import annotations

import asyncio
import io
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from . import constants as C
from .functions import document_title, function_label
from .layout import RenderPlan
from .render import render_png
from .table import value_rows

__all__ = ["ExportError", "ExportState", "DocumentExporter", "export_document"]

logger = logging.getLogger(__name__)

# python-docx sizes pictures in EMU; 9525 EMU per pixel at 96 dpi.
_EMU_PER_PX = 9525


class ExportError(RuntimeError):
    """Export failed; ``str(exc)`` is a generic retry message for the user."""


@dataclass
class ExportState:
    """Typed container for data flowing through the export pipeline."""

    # Inputs
    plan: RenderPlan
    destination: Path

    # Intermediate results
    png: bytes | None = None
    image: bytes | None = None
    document: Any | None = None
    payload: bytes | None = None

    # Output
    saved_path: Path | None = None

    # Error handling
    error: str | None = None
    cause: BaseException | None = None


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------

def _step_rasterize(state: ExportState) -> ExportState:
    state.png = render_png(state.plan)
    return state


def _step_encode(state: ExportState) -> ExportState:
    from PIL import Image  # type: ignore

    if not state.png:
        raise ValueError("graph snapshot unavailable")
    size = (C.EXPORT_IMAGE_SIZE, C.EXPORT_IMAGE_SIZE)
    with Image.open(io.BytesIO(state.png)) as img:
        snapshot = img.convert("RGB").resize(size, Image.Resampling.LANCZOS)
    buf = io.BytesIO()
    snapshot.save(buf, format="PNG")
    state.image = buf.getvalue()
    return state


def _centered(doc: Any, text: str = "", *, space_after: int = 0) -> Any:
    from docx.enum.text import WD_ALIGN_PARAGRAPH  # type: ignore
    from docx.shared import Pt  # type: ignore

    para = doc.add_paragraph()
    para.alignment = WD_ALIGN_PARAGRAPH.CENTER
    para.paragraph_format.space_after = Pt(space_after)
    run = para.add_run(text)
    return para, run


def _step_embed(state: ExportState) -> ExportState:
    from docx import Document  # type: ignore
    from docx.enum.text import WD_ALIGN_PARAGRAPH  # type: ignore
    from docx.shared import Emu, Pt, RGBColor  # type: ignore

    if not state.image:
        raise ValueError("encoded graph image unavailable")
    descriptor = state.plan.descriptor
    doc = Document()

    _, run = _centered(doc, C.DOCUMENT_HEADING, space_after=20)
    run.bold = True
    run.font.size = Pt(16)

    _, run = _centered(doc, document_title(descriptor), space_after=10)
    run.bold = True
    run.font.size = Pt(14)
    run.font.color.rgb = RGBColor(0xB2, 0x22, 0x22)

    caption = doc.add_paragraph()
    caption.add_run(C.TABLE_CAPTION).bold = True

    rows = value_rows(
        state.plan.points,
        function_label(descriptor),
        precision=C.DOCUMENT_PRECISION,
    )
    table = doc.add_table(rows=len(rows), cols=len(rows[0]))
    table.style = "Table Grid"
    for r, row in enumerate(rows):
        for c, text in enumerate(row):
            para = table.cell(r, c).paragraphs[0]
            para.alignment = WD_ALIGN_PARAGRAPH.CENTER
            para.add_run(text).bold = c == 0

    _centered(doc, space_after=15)
    caption = doc.add_paragraph()
    caption.add_run(C.GRAPH_CAPTION).bold = True

    _, run = _centered(doc)
    side = Emu(C.EXPORT_IMAGE_SIZE * _EMU_PER_PX)
    run.add_picture(io.BytesIO(state.image), width=side, height=side)

    _centered(doc, space_after=15)
    _, run = _centered(doc, C.DOCUMENT_FOOTER)
    run.italic = True
    run.font.size = Pt(10)
    run.font.color.rgb = RGBColor(0x66, 0x66, 0x66)

    state.document = doc
    return state


def _step_serialize(state: ExportState) -> ExportState:
    buf = io.BytesIO()
    state.document.save(buf)
    state.payload = buf.getvalue()
    return state


def _step_persist(state: ExportState) -> ExportState:
    if not state.payload:
        raise ValueError("serialized document is empty")
    dest = state.destination
    dest.parent.mkdir(parents=True, exist_ok=True)
    # Write next to the destination then swap in, so a failure leaves no partial file.
    fd, tmp = tempfile.mkstemp(suffix=".docx.part", dir=dest.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(state.payload)
        os.replace(tmp, dest)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
    state.saved_path = dest
    return state


# ---------------------------------------------------------------------------
# Sequential runner
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class _Graph:
    steps: list[Callable[[ExportState], ExportState]]


class _Runner:
    """Minimal sequential stage executor that stops at the first failure."""

    def __init__(self, graph: _Graph) -> None:
        self.graph = graph
        self.logger = logging.getLogger(__name__)

    async def run(self, state: ExportState) -> ExportState:
        steps = self.graph.steps
        for idx, step in enumerate(steps):
            name = step.__name__.replace("_step_", "").lstrip("_")
            self.logger.info(
                "[graph-worksheet] export step %d/%d: %s", idx + 1, len(steps), name
            )
            try:
                state = await asyncio.to_thread(step, state)
            except Exception as exc:
                state.error = f"{name} failed: {exc}"
                state.cause = exc
                self.logger.warning("[graph-worksheet] export %s", state.error)
                return state
        return state


_PIPELINE = _Graph(
    steps=[
        _step_rasterize,
        _step_encode,
        _step_embed,
        _step_serialize,
        _step_persist,
    ]
)


class DocumentExporter:
    """Serializes export requests: one pipeline run at a time."""

    def __init__(self, graph: _Graph = _PIPELINE) -> None:
        self._runner = _Runner(graph)
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def export(self, plan: RenderPlan, destination: str | Path) -> Path:
        """Write the worksheet document for *plan* and return its path."""
        async with self._lock:
            state = await self._runner.run(ExportState(plan, Path(destination)))
        if state.error is not None or state.saved_path is None:
            raise ExportError(C.EXPORT_FAILED_MESSAGE) from state.cause
        logger.info("document written to %s", state.saved_path)
        return state.saved_path


def export_document(plan: RenderPlan, destination: str | Path) -> Path:
    """Blocking wrapper around :meth:`DocumentExporter.export`."""
    return asyncio.run(DocumentExporter().export(plan, destination))
