"""Design session state for the layout editor.

One DesignSession per editor instance (browser tab). The current interaction
mode is a single tagged value, so only one of calibration, room drawing,
routing or object dragging can be in progress at a time.
"""

import base64
import binascii
import io
import uuid
from dataclasses import dataclass, field
from typing import Union

from PIL import Image, UnidentifiedImageError

from design.geometry import LiveRect, Point, Rect

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600

# 50 px per meter until the plan is calibrated
DEFAULT_METERS_PER_PIXEL = 1 / 50

ROOM_COLORS = ["#ef4444", "#10b981", "#f59e0b", "#8b5cf6", "#ec4899"]


class EditorError(Exception):
    """User action rejected by the editor; the session is left unchanged."""


# ── Interaction modes ─────────────────────────────────────────


@dataclass
class DragState:
    object_id: str
    offset: Point   # pointer minus object anchor at pickup


@dataclass
class Idle:
    drag: DragState | None = None
    name = "idle"


@dataclass
class Calibrating:
    name = "calibrating"


@dataclass
class DrawingRoom:
    room_name: str
    live_rect: LiveRect | None = None
    name = "drawing_room"


@dataclass
class Routing:
    name = "routing"


Mode = Union[Idle, Calibrating, DrawingRoom, Routing]


# ── Session data ──────────────────────────────────────────────


@dataclass(frozen=True)
class PlanImage:
    """Uploaded floor plan, kept as its data URL plus decoded pixel size."""
    source: str
    width: int
    height: int

    @classmethod
    def from_data_url(cls, data_url: str) -> "PlanImage":
        header, _, payload = data_url.partition(",")
        if not header.startswith("data:image/") or not payload:
            raise EditorError("The plan must be an image file")
        try:
            raw = base64.b64decode(payload, validate=True)
            with Image.open(io.BytesIO(raw)) as img:
                width, height = img.size
        except (binascii.Error, UnidentifiedImageError, OSError) as e:
            raise EditorError(f"Could not decode the plan image: {e}") from e
        return cls(source=data_url, width=width, height=height)


@dataclass
class Calibration:
    points: list[Point] = field(default_factory=list)
    meters_per_pixel: float = DEFAULT_METERS_PER_PIXEL
    is_calibrated: bool = False

    @property
    def pixels_per_meter(self) -> float:
        return 1 / self.meters_per_pixel


@dataclass
class DraggableObject:
    id: str
    label: str
    color: str
    position: Point


@dataclass
class Room:
    name: str
    color: str
    rects: list[Rect] = field(default_factory=list)
    area: float = 0.0   # m2, accumulated over all rects


def default_objects() -> dict[str, DraggableObject]:
    return {
        "boiler": DraggableObject("boiler", "BOILER", "#ef4444", Point(50, 50)),
        "collector": DraggableObject("collector", "MANIFOLD", "#3b82f6", Point(150, 250)),
    }


@dataclass
class DesignSession:
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    plan: PlanImage | None = None
    calibration: Calibration = field(default_factory=Calibration)
    objects: dict[str, DraggableObject] = field(default_factory=default_objects)
    waypoints: list[Point] = field(default_factory=list)
    rooms: dict[str, Room] = field(default_factory=dict)
    mode: Mode = field(default_factory=Idle)
    cursor: Point | None = None

    @property
    def boiler(self) -> DraggableObject:
        return self.objects["boiler"]

    @property
    def collector(self) -> DraggableObject:
        return self.objects["collector"]

    @property
    def awaiting_calibration_distance(self) -> bool:
        return isinstance(self.mode, Calibrating) and len(self.calibration.points) == 2

    @property
    def dragged_object(self) -> DraggableObject | None:
        if isinstance(self.mode, Idle) and self.mode.drag is not None:
            return self.objects[self.mode.drag.object_id]
        return None

    def suggest_room_name(self) -> str:
        return f"Room {len(self.rooms) + 1}"

    def add_room_rect(self, name: str, rect: Rect) -> Room:
        """Add a rectangle to the named room, creating the room if new."""
        room = self.rooms.get(name)
        if room is None:
            room = Room(name=name, color=ROOM_COLORS[len(self.rooms) % len(ROOM_COLORS)])
            self.rooms[name] = room
        room.rects.append(rect)
        room.area += rect.scaled_area(self.calibration.meters_per_pixel)
        return room
