"""
reMarkable Lines Parser

Convert reMarkable version 3 and 5 .rm files to SVG, XFDF or PDF.

Usage:
    from rmlines import parse_file, render_to_file

    doc = parse_file("file.rm")
    render_to_file(doc.pages[0], "output.svg")

CLI:
    python -m rmlines <input.rm> -o <output.svg>
"""

from .brushes import (
    BrushType,
    Color,
    brush_type_from_code,
    color_from_code,
)
from .errors import (
    LinesError,
    FormatError,
    UnknownCodeError,
    VersionError,
    BundleError,
    ConfigError,
)
from .parser import (
    Document,
    Page,
    Layer,
    Line,
    Point,
    parse,
    parse_bytes,
    parse_file,
)
from .geometry import (
    BoundingBox,
    segment_quads,
)
from .config import (
    LayerColors,
    RenderConfig,
    load_config,
    parse_layer_colors,
)
from .renderer import (
    render_svg,
    render_to_file,
)
from .xfdf import (
    render_xfdf,
)
from .bundle import (
    Bundle,
    load_bundle,
)
from .pdf_export import (
    render_pdf,
)

__all__ = [
    "BrushType",
    "Color",
    "brush_type_from_code",
    "color_from_code",
    "LinesError",
    "FormatError",
    "UnknownCodeError",
    "VersionError",
    "BundleError",
    "ConfigError",
    "Document",
    "Page",
    "Layer",
    "Line",
    "Point",
    "parse",
    "parse_bytes",
    "parse_file",
    "BoundingBox",
    "segment_quads",
    "LayerColors",
    "RenderConfig",
    "load_config",
    "parse_layer_colors",
    "render_svg",
    "render_to_file",
    "render_xfdf",
    "Bundle",
    "load_bundle",
    "render_pdf",
]

__version__ = "0.1.0"
