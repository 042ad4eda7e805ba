"""
XFDF export for lines documents.

Writes one annotation per rendered line: a highlight annotation built
from segment quads for highlighter lines, an ink annotation for all
other brushes. Coordinates are written in lines file units.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Sequence
import xml.etree.ElementTree as ET

from .brushes import BrushType
from .parser import Line, Page
from .config import LayerColors, color_to_hex
from .constants import DEFAULT_HIGHLIGHT_COLOR, XFDF_NAMESPACE
from .geometry import BoundingBox, average_width, is_rendered, segment_quads

ANNOTATION_TITLE = "reMarkable"


def rect_attribute(line: Line) -> str:
    b = BoundingBox().enclose_line(line)
    return f"{b.min_x},{b.min_y},{b.max_x},{b.max_y}"


def render_highlighter_line(parent: ET.Element, page_index: int, line: Line,
                            color: str) -> ET.Element:
    """Highlight annotation with one quad per polyline segment."""
    coords = [
        str(value)
        for quad in segment_quads(line)
        for corner in quad
        for value in corner
    ]
    highlight = ET.SubElement(parent, "highlight")
    highlight.set("page", str(page_index))
    highlight.set("color", color_to_hex(color))
    highlight.set("rect", rect_attribute(line))
    highlight.set("title", ANNOTATION_TITLE)
    highlight.set("subject", line.brush_type.value)
    highlight.set("coords", ",".join(coords))
    return highlight


def render_line(parent: ET.Element, page_index: int, line: Line, color: str) -> ET.Element:
    """Ink annotation with a single gesture through the decoded points."""
    ink = ET.SubElement(parent, "ink")
    ink.set("page", str(page_index))
    ink.set("color", color_to_hex(color))
    ink.set("rect", rect_attribute(line))
    ink.set("title", ANNOTATION_TITLE)
    ink.set("subject", line.brush_type.value)
    ink.set("width", str(average_width(line)))

    inklist = ET.SubElement(ink, "inklist")
    gesture = ET.SubElement(inklist, "gesture")
    gesture.text = ";".join(f"{p.x},{p.y}" for p in line.points)
    return ink


def render_xfdf(pages: Sequence[Page], output: BinaryIO,
                layer_colors: LayerColors | None = None,
                highlight_color: str = DEFAULT_HIGHLIGHT_COLOR) -> None:
    """
    Render pages to a single XFDF document.

    Args:
        pages: Parsed pages; the annotation page index is the position here
        output: Binary file-like object to write XFDF to
        layer_colors: Colors per layer for ink annotations
        highlight_color: Color of all highlight annotations
    """
    if layer_colors is None:
        layer_colors = LayerColors()

    xfdf = ET.Element("xfdf")
    xfdf.set("xmlns", XFDF_NAMESPACE)
    f = ET.SubElement(xfdf, "f")
    f.set("href", "")
    annots = ET.SubElement(xfdf, "annots")

    for page_index, page in enumerate(pages):
        for layer_id, layer in enumerate(page.layers):
            for line in layer.lines:
                if not is_rendered(line):
                    continue
                if line.brush_type is BrushType.HIGHLIGHTER:
                    render_highlighter_line(annots, page_index, line, highlight_color)
                else:
                    color = layer_colors.color_for(layer_id, line.color)
                    render_line(annots, page_index, line, color)

    tree = ET.ElementTree(xfdf)
    tree.write(output, encoding="utf-8", xml_declaration=True)
    output.write(b"\n")


def render_to_file(pages: Sequence[Page], path: Path, **kwargs) -> None:
    """Render pages to an XFDF file."""
    with open(path, "wb") as f:
        render_xfdf(pages, f, **kwargs)
