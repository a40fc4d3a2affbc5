"""Editor transition function.

handle_input(session, event) applies one input event to a session in place
and returns it. Rejected actions raise EditorError before any mutation.

Modes:
    idle         pointer events pick up, move and release boiler/manifold
    calibrating  clicks mark two reference points (sliding window of 2)
    drawing_room press-drag-release traces one rectangle for the named room
    routing      clicks append corridor waypoints until double click / Enter
"""

import logging
import math

from design.events import (
    ApplyCalibration,
    CancelCalibration,
    ClearAll,
    ClearRooms,
    ClearWaypoints,
    DoubleClick,
    FinishRouting,
    InputEvent,
    KeyPress,
    LoadPlan,
    PointerDown,
    PointerMove,
    PointerUp,
    RemovePlan,
    StartCalibration,
    StartRoom,
    StartRouting,
)
from design.geometry import LiveRect, Point
from design.session import (
    Calibrating,
    DesignSession,
    DragState,
    DrawingRoom,
    EditorError,
    Idle,
    PlanImage,
    Routing,
)

logger = logging.getLogger(__name__)

# Objects within this pixel radius of the pointer can be picked up
HIT_RADIUS = 30.0

# Traced rectangles must exceed this size (px) on both sides to count
MIN_ROOM_RECT = 10.0

FINISH_ROUTING_KEY = "Enter"


def _require_idle(session: DesignSession, action: str):
    if not isinstance(session.mode, Idle):
        raise EditorError(
            f"Cannot {action} while {session.mode.name.replace('_', ' ')} is in progress"
        )


# ── Pointer events ────────────────────────────────────────────


def _pointer_down(session: DesignSession, event: PointerDown):
    p = event.point
    session.cursor = p
    mode = session.mode

    if isinstance(mode, Calibrating):
        points = session.calibration.points
        points.append(p)
        if len(points) > 2:
            points.pop(0)
        return

    if isinstance(mode, DrawingRoom):
        mode.live_rect = LiveRect(start=p)
        return

    if isinstance(mode, Routing):
        session.waypoints.append(p)
        return

    # Topmost object first
    for obj in reversed(list(session.objects.values())):
        if obj.position.distance_to(p) < HIT_RADIUS:
            session.mode = Idle(drag=DragState(
                object_id=obj.id,
                offset=Point(p.x - obj.position.x, p.y - obj.position.y),
            ))
            return


def _pointer_move(session: DesignSession, event: PointerMove):
    p = event.point
    session.cursor = p
    mode = session.mode

    if isinstance(mode, DrawingRoom) and mode.live_rect is not None:
        mode.live_rect.resize_to(p)
        return

    obj = session.dragged_object
    if obj is not None:
        offset = mode.drag.offset
        obj.position = Point(p.x - offset.x, p.y - offset.y)


def _pointer_up(session: DesignSession, event: PointerUp):
    session.cursor = event.point
    mode = session.mode

    if isinstance(mode, DrawingRoom) and mode.live_rect is not None:
        live = mode.live_rect
        mode.live_rect = None
        if live.exceeds(MIN_ROOM_RECT):
            room = session.add_room_rect(mode.room_name, live.normalized())
            logger.debug("Room %r now %.2f m2 in %d rects",
                         room.name, room.area, len(room.rects))
            session.mode = Idle()
        return

    if isinstance(mode, Idle) and mode.drag is not None:
        session.mode = Idle()


# ── Calibration ───────────────────────────────────────────────


def _start_calibration(session: DesignSession, event: StartCalibration):
    _require_idle(session, "start calibration")
    session.calibration.points = []
    session.mode = Calibrating()


def _apply_calibration(session: DesignSession, event: ApplyCalibration):
    if not isinstance(session.mode, Calibrating):
        raise EditorError("Calibration is not active")
    points = session.calibration.points
    if len(points) != 2:
        raise EditorError("Mark two points on the plan to calibrate")

    distance = event.real_distance
    if distance is None or not math.isfinite(distance) or distance <= 0:
        raise EditorError("Enter a valid real distance greater than 0")

    pixel_distance = points[0].distance_to(points[1])
    if pixel_distance == 0:
        raise EditorError("The two calibration points must be different")

    session.calibration.meters_per_pixel = distance / pixel_distance
    session.calibration.is_calibrated = True
    session.mode = Idle()
    logger.info("Session %s calibrated: %.1f px/m",
                session.id, session.calibration.pixels_per_meter)


def _cancel_calibration(session: DesignSession, event: CancelCalibration):
    if not isinstance(session.mode, Calibrating):
        return
    session.calibration.points = []
    session.mode = Idle()


# ── Rooms ─────────────────────────────────────────────────────


def _start_room(session: DesignSession, event: StartRoom):
    _require_idle(session, "draw a room")
    if not session.calibration.is_calibrated:
        raise EditorError("Calibrate the plan scale first")
    name = (event.room_name or "").strip()
    if not name:
        raise EditorError("A room name is required")
    session.mode = DrawingRoom(room_name=name)


def _clear_rooms(session: DesignSession, event: ClearRooms):
    session.rooms.clear()
    if isinstance(session.mode, DrawingRoom):
        session.mode = Idle()


# ── Routing ───────────────────────────────────────────────────


def _start_routing(session: DesignSession, event: StartRouting):
    _require_idle(session, "start routing")
    session.waypoints = []
    session.mode = Routing()


def _finish_routing(session: DesignSession, event):
    if isinstance(session.mode, Routing):
        session.mode = Idle()
        logger.debug("Route finished with %d waypoints", len(session.waypoints))


def _key_press(session: DesignSession, event: KeyPress):
    if event.key == FINISH_ROUTING_KEY:
        _finish_routing(session, event)


def _clear_waypoints(session: DesignSession, event: ClearWaypoints):
    session.waypoints = []


def _clear_all(session: DesignSession, event: ClearAll):
    session.rooms.clear()
    session.waypoints = []
    if isinstance(session.mode, Calibrating):
        session.calibration.points = []
    session.mode = Idle()


# ── Plan image ────────────────────────────────────────────────


def _load_plan(session: DesignSession, event: LoadPlan):
    session.plan = PlanImage.from_data_url(event.data_url)


def _remove_plan(session: DesignSession, event: RemovePlan):
    session.plan = None
    session.calibration.is_calibrated = False
    if isinstance(session.mode, Calibrating):
        session.calibration.points = []
    if isinstance(session.mode, (Calibrating, DrawingRoom)):
        session.mode = Idle()


_HANDLERS = {
    PointerDown: _pointer_down,
    PointerMove: _pointer_move,
    PointerUp: _pointer_up,
    DoubleClick: _finish_routing,
    KeyPress: _key_press,
    StartCalibration: _start_calibration,
    ApplyCalibration: _apply_calibration,
    CancelCalibration: _cancel_calibration,
    StartRoom: _start_room,
    StartRouting: _start_routing,
    FinishRouting: _finish_routing,
    ClearRooms: _clear_rooms,
    ClearWaypoints: _clear_waypoints,
    ClearAll: _clear_all,
    LoadPlan: _load_plan,
    RemovePlan: _remove_plan,
}


def handle_input(session: DesignSession, event: InputEvent) -> DesignSession:
    """Apply one input event to the session and return it.

    Raises:
        EditorError: the action is not allowed in the current state.
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported editor event: {type(event).__name__}")
    handler(session, event)
    return session
