"""
Shared constants for rendering lines documents.
"""

from .brushes import BrushType

# Device screen dimensions, in lines file units
REMARKABLE_WIDTH = 1404
REMARKABLE_HEIGHT = 1872

# DPI-based scaling
RM_DPI = 227
PDF_DPI = 72.0
RM_TO_PDF_SCALE = RM_DPI / PDF_DPI  # ~3.1528

# Rendered stroke width relative to the recorded point width
WIDTH_FACTOR = 0.8

HIGHLIGHTER_OPACITY = 0.25
BALLPOINT_PRESSURE_EXPONENT = 5.0
BALLPOINT_BASE_OPACITY = 0.7

# Drawn with one path and the first point's width
CONSTANT_WIDTH_BRUSHES = {BrushType.FINELINER, BrushType.HIGHLIGHTER}

# Never rendered
ERASER_BRUSHES = {BrushType.ERASER, BrushType.ERASE_AREA}

# Color mapping - RGB tuples (0-255), for names accepted in layer colors
COLOR_MAP_RGB = {
    "black": (0, 0, 0),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "darkgray": (169, 169, 169),
    "darkgrey": (169, 169, 169),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
    "silver": (192, 192, 192),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "navy": (0, 0, 128),
    "yellow": (255, 255, 0),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "magenta": (255, 0, 255),
    "cyan": (0, 255, 255),
    "brown": (165, 42, 42),
    "pink": (255, 192, 203),
}

DEFAULT_HIGHLIGHT_COLOR = "#ffff00"

XFDF_NAMESPACE = "http://ns.adobe.com/xfdf/"
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
