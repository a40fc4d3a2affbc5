"""Technical advisory generation.

Derives leveled warnings from a calculation:
    - Circuit overflow: total pipe length above the single-circuit limit
    - Floor capacity: high thermal resistance finishes (floating wood, carpet)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from underfloor.rules import MAX_CIRCUIT_LENGTH, floor_config

if TYPE_CHECKING:
    from underfloor.calculation import CalculationInput


class AdvisoryLevel(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    AdvisoryLevel.INFO: 0,
    AdvisoryLevel.WARNING: 1,
    AdvisoryLevel.CRITICAL: 2,
}


@dataclass(frozen=True)
class Advisory:
    level: AdvisoryLevel
    message: str


def _circuit_overflow(total_length: float) -> str:
    circuits = math.ceil(total_length / MAX_CIRCUIT_LENGTH)
    return (
        f"PRESSURE LOSS: total length ({round(total_length)}m) exceeds the "
        f"recommended {MAX_CIRCUIT_LENGTH:.0f}m. Split the installation into "
        f"{circuits} circuits to keep pressure loss acceptable and guarantee "
        "adequate flow."
    )


def _floor_over_capacity(floor_type: str, thermal_load: float, max_power: float) -> str:
    return (
        "CRITICAL WARNING - UNSUITABLE FLOOR:\n\n"
        f"The selected floor finish ({floor_type}) has a high thermal resistance "
        f"and limits emission to {max_power:g} W/m2. The required thermal load "
        f"({thermal_load:g} W/m2) EXCEEDS this capacity.\n\n"
        "TECHNICAL IMPACT:\n"
        "• Significant loss of useful power\n"
        "• Higher thermal inertia (slow response)\n"
        "• Possible heating shortfall\n"
        "• Risk of thermal discomfort\n\n"
        "RECOMMENDATIONS:\n"
        "1. SWITCH TO A STONE FINISH (ceramic, porcelain, stone): allows up to "
        "100 W/m2 with a better thermal response\n"
        "2. CONSIDER RADIATORS: higher emission capacity and per-room control\n"
        "3. THERMAL REDESIGN: improve insulation to reduce the required load\n\n"
        "Proceeding with the installation under these conditions is not "
        "recommended without changing the design."
    )


def _floor_inertia(floor_type: str, thermal_load: float, max_power: float) -> str:
    return (
        "TECHNICAL INFORMATION:\n\n"
        f"The {floor_type} floor has a high thermal resistance that limits "
        f"emission to {max_power:g} W/m2. Although the required load "
        f"({thermal_load:g} W/m2) is within range, consider:\n\n"
        "• Longer warm-up time (high inertia)\n"
        "• Slower response to temperature changes\n"
        "• Stone finishes perform better in high-use areas"
    )


def advise(
    calc_input: CalculationInput,
    total_length: float,
    max_floor_power: float,
) -> Advisory | None:
    """Build the advisory for a calculation, or None when nothing applies.

    Both rules are evaluated independently; messages are joined by a blank
    line and the most severe level wins.
    """
    findings: list[tuple[AdvisoryLevel, str]] = []

    if total_length > MAX_CIRCUIT_LENGTH:
        findings.append((AdvisoryLevel.WARNING, _circuit_overflow(total_length)))

    if floor_config(calc_input.floor_type).requires_step_15:
        floor_name = calc_input.floor_type.value
        if calc_input.thermal_load > max_floor_power:
            findings.append((
                AdvisoryLevel.CRITICAL,
                _floor_over_capacity(floor_name, calc_input.thermal_load, max_floor_power),
            ))
        else:
            findings.append((
                AdvisoryLevel.INFO,
                _floor_inertia(floor_name, calc_input.thermal_load, max_floor_power),
            ))

    if not findings:
        return None

    level = max((lvl for lvl, _ in findings), key=lambda lvl: lvl.severity)
    return Advisory(level=level, message="\n\n".join(msg for _, msg in findings))
