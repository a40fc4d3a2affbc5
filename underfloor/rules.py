"""Floor finish and pipe step rules.

Static lookup tables used by the calculation engine:
    - Floor finish: maximum emissive power and whether a 15 cm step is forced
    - Pipe step: spacing between pipe runs and resulting pipe density
"""

from dataclasses import dataclass
from enum import Enum


class FloorType(str, Enum):
    """Floor finish laid over the heating screed."""
    PETREO = "PETREO"                    # Stone, ceramic, porcelain
    MADERA_MACIZA = "MADERA_MACIZA"      # Solid wood
    MADERA_FLOTANTE = "MADERA_FLOTANTE"  # Floating wood
    MOQUETA = "MOQUETA"                  # Carpet


@dataclass(frozen=True)
class FloorConfig:
    max_power: float        # W/m2
    requires_step_15: bool


@dataclass(frozen=True)
class PipeStep:
    step_cm: int
    density: float          # m of pipe per m2


FLOOR_CONFIG = {
    FloorType.PETREO: FloorConfig(max_power=100.0, requires_step_15=False),
    FloorType.MADERA_MACIZA: FloorConfig(max_power=70.0, requires_step_15=False),
    FloorType.MADERA_FLOTANTE: FloorConfig(max_power=60.0, requires_step_15=True),
    FloorType.MOQUETA: FloorConfig(max_power=60.0, requires_step_15=True),
}

PIPE_STEP_15CM = PipeStep(step_cm=15, density=6.7)
PIPE_STEP_20CM = PipeStep(step_cm=20, density=5.0)

# Loads above this (W/m2) need the tighter 15 cm step
HIGH_LOAD_THRESHOLD = 70.0

# Maximum hydraulically acceptable length of a single circuit (m)
MAX_CIRCUIT_LENGTH = 120.0

DESIGN_NOTE = (
    "Professional design with 20 mm PE-X pipe without oxygen barrier. "
    "Layout computed from the real route along the corridors."
)


def floor_config(floor_type: FloorType) -> FloorConfig:
    return FLOOR_CONFIG[FloorType(floor_type)]


def select_pipe_step(thermal_load: float, floor_type: FloorType) -> PipeStep:
    """Pick the pipe step for a floor finish and thermal load.

    Floating wood and carpet always get the 15 cm step, whatever the load.
    Other finishes get 15 cm above 70 W/m2 and 20 cm otherwise.
    """
    if floor_config(floor_type).requires_step_15:
        return PIPE_STEP_15CM
    if thermal_load > HIGH_LOAD_THRESHOLD:
        return PIPE_STEP_15CM
    return PIPE_STEP_20CM
