"""Real-world distances derived from a design session.

All pixel measurements are scaled by the session's meters-per-pixel factor.
"""

from dataclasses import dataclass, field

from design.geometry import polyline_length
from design.session import DesignSession, Room
from underfloor.rules import MAX_CIRCUIT_LENGTH, PIPE_STEP_15CM


def feed_distance(session: DesignSession) -> float:
    """Straight-line boiler to manifold distance (m)."""
    pixels = session.boiler.position.distance_to(session.collector.position)
    return pixels * session.calibration.meters_per_pixel


def route_distance(session: DesignSession) -> float:
    """Corridor route length from the manifold through every waypoint (m)."""
    if not session.waypoints:
        return 0.0
    path = [session.collector.position, *session.waypoints]
    return polyline_length(path) * session.calibration.meters_per_pixel


def route_distance_to_room(session: DesignSession, room: Room) -> float:
    """Route length plus the hop from the last waypoint to the room's first rect centre."""
    if not session.waypoints or not room.rects:
        return 0.0
    hop = session.waypoints[-1].distance_to(room.rects[0].center)
    return route_distance(session) + hop * session.calibration.meters_per_pixel


def collector_distance(session: DesignSession, manual: float | None) -> float | None:
    """Distance to the manifold for the calculation: traced route wins over the form value."""
    if session.waypoints:
        return route_distance(session)
    return manual


@dataclass
class RoomEstimate:
    name: str
    area: float
    route_distance: float
    pipe_length: float

    @property
    def circuits_needed(self) -> float:
        return self.pipe_length / MAX_CIRCUIT_LENGTH


@dataclass
class RoomsSummary:
    total_area: float = 0.0
    total_length: float = 0.0
    rooms: list[RoomEstimate] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def rooms_summary(session: DesignSession) -> RoomsSummary:
    """Quick per-room pipe estimate at the 15 cm step density.

    Rooms whose serpentine plus supply/return run exceeds one circuit are
    reported in `warnings`.
    """
    summary = RoomsSummary()
    for room in session.rooms.values():
        route = route_distance_to_room(session, room)
        length = room.area * PIPE_STEP_15CM.density + route * 2
        estimate = RoomEstimate(
            name=room.name, area=room.area, route_distance=route, pipe_length=length,
        )
        summary.rooms.append(estimate)
        summary.total_area += room.area
        summary.total_length += length
        if length > MAX_CIRCUIT_LENGTH:
            summary.warnings.append(
                f'Room "{room.name}" needs MULTIPLE circuits '
                f"({estimate.circuits_needed:.1f} circuits)."
            )
    return summary


def calculation_payload(
    session: DesignSession,
    area: float | None,
    thermal_load: float | None,
    floor_type: str | None,
    manual_collector_distance: float | None,
) -> dict:
    """Request body for POST /api/v1/underfloor/calculate."""
    return {
        "area": area,
        "cargaTermicaRequerida": thermal_load,
        "tipoDeSuelo": floor_type,
        "distanciaAlColector": collector_distance(session, manual_collector_distance),
        "distanciaAlimentacion": feed_distance(session),
    }
