"""Current-result holder for an interactive worksheet."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .export import DocumentExporter
from .layout import RenderPlan, layout
from .points import Calculation, calculate
from .table import value_table_html

__all__ = ["WorksheetResult", "WorksheetSession"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WorksheetResult:
    calculation: Calculation
    plan: RenderPlan

    @property
    def table_html(self) -> str:
        return value_table_html(self.calculation.points, self.plan.label)


class WorksheetSession:
    """Holds the latest successful calculation.

    A new calculation replaces the previous result as a whole. When
    validation fails the exception propagates and the previous result stays.
    """

    def __init__(self, exporter: DocumentExporter | None = None) -> None:
        self.result: WorksheetResult | None = None
        self.exporter = exporter or DocumentExporter()

    def calculate(
        self,
        family: str,
        a: str | None,
        b: str | None = None,
        x1: str | None = None,
        x2: str | None = None,
    ) -> WorksheetResult:
        calc = calculate(family, a, b=b, x1=x1, x2=x2)
        result = WorksheetResult(calc, layout(calc.descriptor, calc.points))
        self.result = result
        logger.info("new result: %s", result.plan.label)
        return result

    def reset(self) -> None:
        self.result = None

    async def export(self, destination: str | Path) -> Path:
        if self.result is None:
            raise RuntimeError("Nothing to export; run a calculation first.")
        return await self.exporter.export(self.result.plan, destination)
