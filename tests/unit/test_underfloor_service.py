"""Unit tests for the calculation service."""

import pytest

from backend.services.underfloor_service import UnderfloorService
from underfloor.calculation import CalculationInput
from underfloor.catalog import CatalogError
from underfloor.rules import FloorType

ROOM = CalculationInput(area=20, thermal_load=65, floor_type=FloorType.MOQUETA,
                        collector_distance=3)


class TestUnderfloorService:
    def test_calculate_with_budget(self):
        service = UnderfloorService()
        result, budget = service.calculate(ROOM)
        assert result.total_length == 140.0
        assert budget.items
        assert budget.total > 0

    def test_catalog_loaded_once(self):
        service = UnderfloorService()
        engine = service.budget_engine
        assert service.budget_engine is engine
        assert service.load_catalog() is not engine

    def test_missing_catalog(self, tmp_path):
        service = UnderfloorService(catalog_path=tmp_path / "missing.json")
        with pytest.raises(CatalogError):
            service.calculate(ROOM)
