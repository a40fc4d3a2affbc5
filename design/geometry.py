"""Pixel-space geometry helpers for the layout editor."""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle anchored at its top-left corner (canvas y grows downward)."""
    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> Point:
        return Point(self.x + self.w / 2, self.y + self.h / 2)

    def scaled_area(self, meters_per_pixel: float) -> float:
        """Real-world area in m2."""
        return (abs(self.w) * meters_per_pixel) * (abs(self.h) * meters_per_pixel)


@dataclass
class LiveRect:
    """Rectangle being dragged out; width/height may be negative."""
    start: Point
    w: float = 0.0
    h: float = 0.0

    def resize_to(self, p: Point):
        self.w = p.x - self.start.x
        self.h = p.y - self.start.y

    def exceeds(self, threshold: float) -> bool:
        return abs(self.w) > threshold and abs(self.h) > threshold

    def normalized(self) -> Rect:
        return Rect(
            x=self.start.x if self.w > 0 else self.start.x + self.w,
            y=self.start.y if self.h > 0 else self.start.y + self.h,
            w=abs(self.w),
            h=abs(self.h),
        )


def polyline_length(points: Sequence[Point]) -> float:
    """Sum of segment lengths along an ordered point sequence."""
    if len(points) < 2:
        return 0.0
    xy = np.array([(p.x, p.y) for p in points], dtype=float)
    return float(np.hypot(*np.diff(xy, axis=0).T).sum())


def spiral_path(x: float, y: float, w: float, h: float, step: float) -> list[Point]:
    """Corner points of a square spiral winding inward from (x, y).

    Each lap walks top, right, bottom and left edges, then steps `step`
    inward on every side until the remaining box is no larger than `step`.
    """
    if step <= 0:
        return []
    points = [Point(x, y + h / 2)]
    while w > step and h > step:
        points.extend([
            Point(x, y),
            Point(x + w, y),
            Point(x + w, y + h),
            Point(x, y + h),
            Point(x, y + step),
        ])
        x += step
        y += step
        w -= step * 2
        h -= step * 2
        points.append(Point(x, y + h / 2))
    return points
