"""
Geometry helpers shared by the renderers.

Everything here is a pure function of the parsed document: bounding
boxes for cropping, the per-brush stroke width policy, and the quad
decomposition used for highlight annotations.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from .brushes import BrushType
from .parser import Line, Page, Point
from .constants import (
    REMARKABLE_WIDTH,
    REMARKABLE_HEIGHT,
    WIDTH_FACTOR,
    HIGHLIGHTER_OPACITY,
    BALLPOINT_PRESSURE_EXPONENT,
    BALLPOINT_BASE_OPACITY,
    CONSTANT_WIDTH_BRUSHES,
    ERASER_BRUSHES,
)

Viewport = tuple[float, float, float, float]
Corner = tuple[float, float]
Quad = tuple[Corner, Corner, Corner, Corner]

DEVICE_VIEWPORT: Viewport = (0, 0, REMARKABLE_WIDTH, REMARKABLE_HEIGHT)

# Below this, the bisector is treated as folded back onto the segment
_MIN_MITER_COS = 1e-3


# =============================================================================
# Bounding Box
# =============================================================================

@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box; starts inverted so the first point sets it."""
    min_x: float = math.inf
    min_y: float = math.inf
    max_x: float = -math.inf
    max_y: float = -math.inf

    @property
    def is_bounded(self) -> bool:
        return self.min_x <= self.max_x and self.min_y <= self.max_y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def enclose_point(self, point: Point) -> BoundingBox:
        return BoundingBox(
            min(self.min_x, point.x),
            min(self.min_y, point.y),
            max(self.max_x, point.x),
            max(self.max_y, point.y),
        )

    def enclose_line(self, line: Line) -> BoundingBox:
        box = self
        for point in line.points:
            box = box.enclose_point(point)
        return box

    def enclose_page(self, page: Page) -> BoundingBox:
        box = self
        for line in page.all_lines():
            if not line.is_empty:
                box = box.enclose_line(line)
        return box

    def viewport(self) -> Viewport:
        """Return (min_x, min_y, width, height)."""
        return (self.min_x, self.min_y, self.width, self.height)


def page_viewport(page: Page, auto_crop: bool = True) -> Viewport:
    """Viewport for a page: cropped to its ink, or the device screen."""
    if auto_crop:
        box = BoundingBox().enclose_page(page)
        if box.is_bounded:
            return box.viewport()
    return DEVICE_VIEWPORT


# =============================================================================
# Stroke Width Policy
# =============================================================================

class StrokeKind(Enum):
    CONSTANT = "constant"
    VARIABLE = "variable"
    SUPPRESSED = "suppressed"


@dataclass(frozen=True)
class Segment:
    """One straight piece of a variable-width line."""
    start: Point
    end: Point
    width: float
    opacity: float


def stroke_kind(brush: BrushType) -> StrokeKind:
    if brush in ERASER_BRUSHES:
        return StrokeKind.SUPPRESSED
    if brush in CONSTANT_WIDTH_BRUSHES:
        return StrokeKind.CONSTANT
    return StrokeKind.VARIABLE


def is_rendered(line: Line) -> bool:
    """Check if a line produces any visible geometry."""
    return not line.is_empty and stroke_kind(line.brush_type) is not StrokeKind.SUPPRESSED


def constant_width(line: Line) -> float:
    """Stroke width for constant-width lines, from the first point."""
    return line.points[0].width * WIDTH_FACTOR


def line_cap(brush: BrushType) -> str:
    return "butt" if brush is BrushType.HIGHLIGHTER else "round"


def line_opacity(brush: BrushType) -> float:
    return HIGHLIGHTER_OPACITY if brush is BrushType.HIGHLIGHTER else 1.0


def segment_opacity(brush: BrushType, point: Point) -> float:
    if brush is BrushType.BALLPOINT:
        return point.pressure ** BALLPOINT_PRESSURE_EXPONENT + BALLPOINT_BASE_OPACITY
    return 1.0


def variable_segments(line: Line) -> Iterator[Segment]:
    """Yield one segment per consecutive point pair, styled by its end point."""
    for start, end in zip(line.points, line.points[1:]):
        yield Segment(
            start=start,
            end=end,
            width=end.width * WIDTH_FACTOR,
            opacity=segment_opacity(line.brush_type, end),
        )


def average_width(line: Line) -> float:
    if line.is_empty:
        return 0.0
    return sum(p.width for p in line.points) / len(line.points)


# =============================================================================
# Highlighter Quads
# =============================================================================

def _unit_normal(start: Point, end: Point) -> Optional[Corner]:
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy)
    if length == 0:
        return None
    return (-dy / length, dx / length)


def _joint_offset(before: Corner, after: Corner, half_width: float) -> Optional[Corner]:
    """Offset along the bisector of two segment normals, None if folded back."""
    mx = before[0] + after[0]
    my = before[1] + after[1]
    length = math.hypot(mx, my)
    if length == 0:
        return None
    mx /= length
    my /= length
    # cos of half the angle between the normals
    cos_half = mx * before[0] + my * before[1]
    if cos_half < _MIN_MITER_COS:
        return None
    scale = half_width / cos_half
    return (mx * scale, my * scale)


def segment_quads(line: Line, half_width: Optional[float] = None) -> list[Quad]:
    """
    Decompose a line into one quad per segment.

    Each quad is (start_left, end_left, start_right, end_right). The long
    edges run parallel to the segment at +/- half_width. Where two segments
    meet, the shared edge lies on the bisector of the joint so neighbouring
    quads neither overlap nor leave a gap. The outer ends of the first and
    last segment are cut perpendicular to the segment.
    """
    points = line.points
    if len(points) < 2:
        return []
    if half_width is None:
        half_width = constant_width(line) / 2

    normals: list[Corner] = []
    previous: Corner = (0.0, 1.0)
    for start, end in zip(points, points[1:]):
        normal = _unit_normal(start, end)
        if normal is None:
            normal = previous
        normals.append(normal)
        previous = normal

    def own_offset(i: int) -> Corner:
        return (normals[i][0] * half_width, normals[i][1] * half_width)

    quads: list[Quad] = []
    for i, (start, end) in enumerate(zip(points, points[1:])):
        start_offset = own_offset(i)
        if i > 0:
            start_offset = _joint_offset(normals[i - 1], normals[i], half_width) or start_offset
        end_offset = own_offset(i)
        if i < len(normals) - 1:
            end_offset = _joint_offset(normals[i], normals[i + 1], half_width) or end_offset

        quads.append((
            (start.x + start_offset[0], start.y + start_offset[1]),
            (end.x + end_offset[0], end.y + end_offset[1]),
            (start.x - start_offset[0], start.y - start_offset[1]),
            (end.x - end_offset[0], end.y - end_offset[1]),
        ))
    return quads
