"""Unit tests for the underfloor calculation engine."""

import math

import pytest

from underfloor.advisory import AdvisoryLevel
from underfloor.calculation import CalculationInput, calculate, circuit_count
from underfloor.rules import (
    DESIGN_NOTE,
    FLOOR_CONFIG,
    PIPE_STEP_15CM,
    PIPE_STEP_20CM,
    FloorType,
    select_pipe_step,
)

FORCED_FLOORS = [FloorType.MADERA_FLOTANTE, FloorType.MOQUETA]
FREE_FLOORS = [FloorType.PETREO, FloorType.MADERA_MACIZA]


def make_input(area=50.0, load=80.0, floor=FloorType.PETREO, distance=10.0, feed=None):
    return CalculationInput(
        area=area, thermal_load=load, floor_type=floor,
        collector_distance=distance, feed_distance=feed,
    )


class TestPipeStepSelection:
    @pytest.mark.parametrize("floor", FORCED_FLOORS)
    @pytest.mark.parametrize("load", [10, 40, 70, 71, 150])
    def test_forced_floors_always_15cm(self, floor, load):
        assert select_pipe_step(load, floor) == PIPE_STEP_15CM

    @pytest.mark.parametrize("floor", FREE_FLOORS)
    def test_high_load_gets_15cm(self, floor):
        step = select_pipe_step(70.5, floor)
        assert step.step_cm == 15
        assert step.density == 6.7

    @pytest.mark.parametrize("floor", FREE_FLOORS)
    @pytest.mark.parametrize("load", [10, 55, 70])
    def test_low_load_gets_20cm(self, floor, load):
        step = select_pipe_step(load, floor)
        assert step.step_cm == 20
        assert step.density == 5.0

    def test_floor_table(self):
        assert FLOOR_CONFIG[FloorType.PETREO].max_power == 100
        assert FLOOR_CONFIG[FloorType.MADERA_MACIZA].max_power == 70
        assert FLOOR_CONFIG[FloorType.MADERA_FLOTANTE].max_power == 60
        assert FLOOR_CONFIG[FloorType.MOQUETA].max_power == 60

    def test_accepts_raw_string_floor(self):
        assert select_pipe_step(20, "MOQUETA") == PIPE_STEP_15CM
        assert select_pipe_step(20, "PETREO") == PIPE_STEP_20CM


class TestCalculate:
    def test_stone_high_load_scenario(self):
        out = calculate(make_input(area=50, load=80, floor=FloorType.PETREO, distance=10))
        assert out.pipe_step_cm == 15
        assert out.pipe_density == 6.7
        assert out.serpentine_length == 335.0
        assert out.feed_run_length == 20.0
        assert out.total_length == 355.0
        assert out.circuit_count == 3
        assert out.max_floor_power == 100
        assert out.advisory is not None
        assert out.advisory.level == AdvisoryLevel.WARNING
        assert "3 circuits" in out.advisory.message

    def test_carpet_over_capacity_scenario(self):
        out = calculate(make_input(area=20, load=65, floor=FloorType.MOQUETA, distance=3))
        assert out.pipe_step_cm == 15
        assert out.serpentine_length == 134.0
        assert out.feed_run_length == 6.0
        assert out.total_length == 140.0
        assert out.circuit_count == 2
        assert out.max_floor_power == 60
        assert out.advisory.level == AdvisoryLevel.CRITICAL

    def test_small_stone_room_has_no_advisory(self):
        out = calculate(make_input(area=10, load=50, floor=FloorType.PETREO, distance=2))
        assert out.pipe_step_cm == 20
        assert out.total_length == 54.0
        assert out.circuit_count == 1
        assert out.advisory is None

    def test_design_note_and_feed_passthrough(self):
        out = calculate(make_input(feed=7.5))
        assert out.design_note == DESIGN_NOTE
        assert out.feed_distance == 7.5
        assert calculate(make_input()).feed_distance is None

    def test_lengths_rounded_to_two_decimals(self):
        out = calculate(make_input(area=12.345, load=80, distance=1.111))
        assert out.serpentine_length == 82.71
        assert out.feed_run_length == 2.22
        assert out.total_length == 84.93

    @pytest.mark.parametrize("area", [1, 17.9, 50, 333.3, 1000])
    @pytest.mark.parametrize("load", [10, 70, 71, 150])
    @pytest.mark.parametrize("floor", list(FloorType))
    @pytest.mark.parametrize("distance", [0, 12.5, 50])
    def test_length_and_circuit_invariants(self, area, load, floor, distance):
        out = calculate(make_input(area=area, load=load, floor=floor, distance=distance))
        assert out.total_length == pytest.approx(out.serpentine_length + 2 * distance, abs=0.01)
        assert out.circuit_count == math.ceil(out.total_length / 120)
        assert out.circuit_count >= 1

    def test_zero_length_has_no_circuits(self):
        assert circuit_count(0) == 0
        assert circuit_count(120) == 1
        assert circuit_count(120.01) == 2
