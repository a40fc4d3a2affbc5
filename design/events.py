"""Input events consumed by the layout editor.

Pointer events carry canvas pixel coordinates. Action events correspond to
toolbar buttons and dialogs. DoubleClick and KeyPress have no source in the
Dash editor, which ends routing with FinishRouting; they serve other
front ends driving handle_input directly.
"""

from dataclasses import dataclass

from design.geometry import Point


@dataclass(frozen=True)
class PointerDown:
    x: float
    y: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class PointerUp:
    x: float
    y: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class DoubleClick:
    x: float
    y: float


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class StartCalibration:
    pass


@dataclass(frozen=True)
class ApplyCalibration:
    real_distance: float | None   # m between the two marked points


@dataclass(frozen=True)
class CancelCalibration:
    pass


@dataclass(frozen=True)
class StartRoom:
    room_name: str | None


@dataclass(frozen=True)
class StartRouting:
    pass


@dataclass(frozen=True)
class FinishRouting:
    pass


@dataclass(frozen=True)
class ClearRooms:
    pass


@dataclass(frozen=True)
class ClearWaypoints:
    pass


@dataclass(frozen=True)
class ClearAll:
    pass


@dataclass(frozen=True)
class LoadPlan:
    data_url: str


@dataclass(frozen=True)
class RemovePlan:
    pass


InputEvent = (
    PointerDown | PointerMove | PointerUp | DoubleClick | KeyPress
    | StartCalibration | ApplyCalibration | CancelCalibration
    | StartRoom | StartRouting | FinishRouting
    | ClearRooms | ClearWaypoints | ClearAll
    | LoadPlan | RemovePlan
)
