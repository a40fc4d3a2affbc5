"""Unit tests for advisory generation."""

import pytest

from underfloor.advisory import Advisory, AdvisoryLevel, advise
from underfloor.calculation import CalculationInput
from underfloor.rules import FloorType


def make_input(floor, load):
    return CalculationInput(area=10, thermal_load=load, floor_type=floor, collector_distance=0)


class TestAdvisoryLevels:
    def test_severity_order(self):
        assert AdvisoryLevel.INFO.severity < AdvisoryLevel.WARNING.severity
        assert AdvisoryLevel.WARNING.severity < AdvisoryLevel.CRITICAL.severity

    def test_wire_values(self):
        assert [lvl.value for lvl in AdvisoryLevel] == ["INFO", "WARNING", "CRITICAL"]


class TestAdvise:
    @pytest.mark.parametrize("floor", [FloorType.PETREO, FloorType.MADERA_MACIZA])
    def test_nothing_for_short_free_floor(self, floor):
        assert advise(make_input(floor, 150), 120.0, 100) is None

    def test_circuit_overflow_warning(self):
        adv = advise(make_input(FloorType.PETREO, 80), 355.0, 100)
        assert isinstance(adv, Advisory)
        assert adv.level == AdvisoryLevel.WARNING
        assert "355m" in adv.message
        assert "3 circuits" in adv.message

    def test_exactly_120m_is_not_overflow(self):
        assert advise(make_input(FloorType.PETREO, 80), 120.0, 100) is None

    @pytest.mark.parametrize("floor", [FloorType.MADERA_FLOTANTE, FloorType.MOQUETA])
    def test_critical_when_load_exceeds_floor(self, floor):
        adv = advise(make_input(floor, 65), 100.0, 60)
        assert adv.level == AdvisoryLevel.CRITICAL
        assert floor.value in adv.message
        assert "STONE" in adv.message
        assert "RADIATORS" in adv.message

    @pytest.mark.parametrize("load", [10, 59, 60])
    def test_info_when_load_within_floor(self, load):
        adv = advise(make_input(FloorType.MADERA_FLOTANTE, load), 100.0, 60)
        assert adv.level == AdvisoryLevel.INFO
        assert "inertia" in adv.message

    def test_warning_beats_info(self):
        adv = advise(make_input(FloorType.MOQUETA, 50), 200.0, 60)
        assert adv.level == AdvisoryLevel.WARNING
        parts = adv.message.split("\n\n")
        assert parts[0].startswith("PRESSURE LOSS")
        assert "TECHNICAL INFORMATION" in adv.message

    def test_critical_beats_warning_and_both_reported(self):
        adv = advise(make_input(FloorType.MOQUETA, 90), 500.0, 60)
        assert adv.level == AdvisoryLevel.CRITICAL
        assert adv.message.startswith("PRESSURE LOSS")
        assert "CRITICAL WARNING" in adv.message
