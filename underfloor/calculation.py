"""Underfloor heating calculation engine.

Pure and deterministic: input ranges are validated upstream (API schemas),
so the engine never rejects an input.

Formulas:
    serpentine = area * density
    feed run   = collector distance * 2  (supply + return)
    total      = serpentine + feed run
    circuits   = ceil(total / 120)
"""

import math
from dataclasses import dataclass

from underfloor.advisory import Advisory, advise
from underfloor.rules import (
    DESIGN_NOTE,
    MAX_CIRCUIT_LENGTH,
    FloorType,
    floor_config,
    select_pipe_step,
)


@dataclass(frozen=True)
class CalculationInput:
    area: float                 # m2
    thermal_load: float         # W/m2
    floor_type: FloorType
    collector_distance: float   # m, manifold to room entrance
    feed_distance: float | None = None  # m, boiler to manifold


@dataclass(frozen=True)
class CalculationOutput:
    pipe_step_cm: int
    pipe_density: float
    serpentine_length: float
    feed_run_length: float
    total_length: float
    circuit_count: int
    max_floor_power: float
    design_note: str
    advisory: Advisory | None = None
    feed_distance: float | None = None


def circuit_count(total_length: float) -> int:
    return math.ceil(total_length / MAX_CIRCUIT_LENGTH)


def calculate(calc_input: CalculationInput) -> CalculationOutput:
    """Compute pipe step, lengths, circuits and advisory for one area."""
    step = select_pipe_step(calc_input.thermal_load, calc_input.floor_type)

    serpentine = calc_input.area * step.density
    feed_run = calc_input.collector_distance * 2
    total = round(serpentine + feed_run, 2)

    max_power = floor_config(calc_input.floor_type).max_power

    return CalculationOutput(
        pipe_step_cm=step.step_cm,
        pipe_density=step.density,
        serpentine_length=round(serpentine, 2),
        feed_run_length=round(feed_run, 2),
        total_length=total,
        circuit_count=circuit_count(total),
        max_floor_power=max_power,
        design_note=DESIGN_NOTE,
        advisory=advise(calc_input, total, max_power),
        feed_distance=calc_input.feed_distance,
    )
