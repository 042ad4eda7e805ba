"""
Brush type and color codes used in version 3 and 5 lines files.

Codes are looked up in fixed tables. A code missing from a table fails
the decode instead of being carried along as a raw int.
"""

from __future__ import annotations

from enum import Enum

from .errors import UnknownCodeError


class BrushType(Enum):
    """Pen/tool types."""
    ERASER = "Eraser"
    ERASE_AREA = "EraseArea"
    BRUSH = "Brush"
    SHARP_PENCIL = "SharpPencil"
    TILT_PENCIL = "TiltPencil"
    BALLPOINT = "BallPoint"
    MARKER = "Marker"
    FINELINER = "Fineliner"
    HIGHLIGHTER = "Highlighter"
    CALLIGRAPHY = "Calligraphy"


class Color(Enum):
    """Pen colors. The value is the index into a layer's color triple."""
    BLACK = 0
    GREY = 1
    WHITE = 2


BRUSH_TYPE_CODES: dict[int, BrushType] = {
    6: BrushType.ERASER,
    8: BrushType.ERASE_AREA,
    12: BrushType.BRUSH,
    13: BrushType.SHARP_PENCIL,
    14: BrushType.TILT_PENCIL,
    15: BrushType.BALLPOINT,
    16: BrushType.MARKER,
    17: BrushType.FINELINER,
    18: BrushType.HIGHLIGHTER,
    21: BrushType.CALLIGRAPHY,
}

COLOR_CODES: dict[int, Color] = {
    0: Color.BLACK,
    1: Color.GREY,
    2: Color.WHITE,
}


def brush_type_from_code(code: int) -> BrushType:
    """Map a raw brush code to its BrushType, raising UnknownCodeError."""
    try:
        return BRUSH_TYPE_CODES[code]
    except KeyError:
        raise UnknownCodeError("brush type", code) from None


def color_from_code(code: int) -> Color:
    """Map a raw color code to its Color, raising UnknownCodeError."""
    try:
        return COLOR_CODES[code]
    except KeyError:
        raise UnknownCodeError("color", code) from None
