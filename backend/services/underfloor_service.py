"""Underfloor heating calculation service.

Runs the calculation engine and the budget engine for one request. The
catalog is loaded on first use and kept for the life of the process.
"""

import logging
from pathlib import Path

from backend.core.config import settings
from underfloor.budget import Budget, BudgetEngine
from underfloor.calculation import CalculationInput, CalculationOutput, calculate
from underfloor.catalog import Catalog

logger = logging.getLogger(__name__)


class UnderfloorService:
    """Calculation + budget orchestration."""

    def __init__(self, catalog_path: str | Path | None = None):
        self.catalog_path = Path(catalog_path or settings.CATALOG_PATH)
        self._budget_engine: BudgetEngine | None = None

    def load_catalog(self) -> BudgetEngine:
        self._budget_engine = BudgetEngine(Catalog.load(self.catalog_path))
        return self._budget_engine

    @property
    def budget_engine(self) -> BudgetEngine:
        if self._budget_engine is None:
            return self.load_catalog()
        return self._budget_engine

    def calculate(self, calc_input: CalculationInput) -> tuple[CalculationOutput, Budget]:
        """Calculate installation parameters and the materials budget.

        Raises:
            CatalogError: the catalog file cannot be read.
            ManifoldCapacityError: no manifold fits the circuit count.
        """
        result = calculate(calc_input)
        logger.debug(
            "Calculated %.1f m2 %s: step=%dcm total=%.2fm circuits=%d",
            calc_input.area, calc_input.floor_type.value,
            result.pipe_step_cm, result.total_length, result.circuit_count,
        )
        budget = self.budget_engine.budget(result, calc_input.area)
        return result, budget
