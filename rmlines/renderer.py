"""
SVG Renderer for lines documents.

Converts one parsed page to SVG: a group per layer, a path per
constant-width line and a group of segment paths per variable-width line.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import BinaryIO
import xml.etree.ElementTree as ET

from .parser import Line, Page, Point
from .config import LayerColors
from .constants import SVG_NAMESPACE
from .geometry import (
    StrokeKind,
    stroke_kind,
    is_rendered,
    constant_width,
    line_cap,
    line_opacity,
    variable_segments,
    page_viewport,
)

DEBUG_STYLE = """
path:hover {
    filter: drop-shadow(0 0 5px #e00);
    color: #e00;
}
"""


# =============================================================================
# Formatting
# =============================================================================

def fmt(value: float) -> str:
    # Shortest round-tripping form, values are written unquantised
    return repr(float(value))


def points_to_path(points: tuple[Point, ...]) -> str:
    """Straight polyline through all points, in order."""
    first, *rest = points
    path = f"M {fmt(first.x)} {fmt(first.y)}"
    for p in rest:
        path += f" L {fmt(p.x)} {fmt(p.y)}"
    return path


def describe_line(line: Line) -> str:
    """Field dump of a line for debug tooltips (points summarized)."""
    fields = []
    for f in dataclasses.fields(line):
        value = getattr(line, f.name)
        if f.name == "points":
            value = len(value)
        elif hasattr(value, "name"):
            value = value.name
        fields.append(f"{f.name}: {value}")
    return "Line\n" + "\n".join(fields)


def add_tooltip(element: ET.Element, text: str) -> None:
    title = ET.SubElement(element, "title")
    title.text = text


# =============================================================================
# Line Rendering
# =============================================================================

def render_constant_width_line(parent: ET.Element, line: Line, css_color: str,
                               debug_dump: bool = False) -> ET.Element:
    """One path through all points, width taken from the first point."""
    path = ET.SubElement(parent, "path")
    path.set("fill", "none")
    path.set("d", points_to_path(line.points))
    path.set("color", css_color)
    path.set("stroke", "currentColor")
    path.set("class", line.brush_type.value)
    path.set("stroke-width", fmt(constant_width(line)))
    path.set("stroke-linecap", line_cap(line.brush_type))

    opacity = line_opacity(line.brush_type)
    if opacity < 1.0:
        path.set("stroke-opacity", fmt(opacity))

    if debug_dump:
        add_tooltip(path, describe_line(line))
    return path


def render_variable_width_line(parent: ET.Element, line: Line, css_color: str,
                               debug_dump: bool = False) -> ET.Element:
    """A group with one path per segment, each styled by its end point."""
    group = ET.SubElement(parent, "g")
    group.set("fill", "none")
    group.set("color", css_color)
    group.set("stroke", "currentColor")
    group.set("stroke-linecap", "round")
    group.set("class", line.brush_type.value)

    for segment in variable_segments(line):
        path = ET.SubElement(group, "path")
        path.set("stroke-width", fmt(segment.width))
        path.set("d", points_to_path((segment.start, segment.end)))
        if segment.opacity < 1.0:
            path.set("stroke-opacity", fmt(segment.opacity))

        if debug_dump:
            add_tooltip(path, f"{segment.start!r}\n{segment.end!r}")
    return group


# =============================================================================
# SVG Document Generation
# =============================================================================

def render_svg(page: Page, output: BinaryIO, layer_colors: LayerColors | None = None,
               auto_crop: bool = True, debug_dump: bool = False) -> None:
    """
    Render a page to SVG.

    Args:
        page: Parsed page
        output: Binary file-like object to write SVG to
        layer_colors: Colors per layer (default: black/gray/white)
        auto_crop: Crop the viewBox to the ink instead of the device screen
        debug_dump: Attach a tooltip with the source data to every path
    """
    if layer_colors is None:
        layer_colors = LayerColors()

    svg = ET.Element("svg")
    svg.set("xmlns", SVG_NAMESPACE)
    min_x, min_y, width, height = page_viewport(page, auto_crop)
    svg.set("viewBox", f"{fmt(min_x)} {fmt(min_y)} {fmt(width)} {fmt(height)}")
    svg.set("width", fmt(width))
    svg.set("height", fmt(height))

    for layer_id, layer in enumerate(page.layers):
        g = ET.SubElement(svg, "g")
        g.set("class", "layer")

        for line in layer.lines:
            if not is_rendered(line):
                continue

            css_color = layer_colors.color_for(layer_id, line.color)
            if stroke_kind(line.brush_type) is StrokeKind.CONSTANT:
                render_constant_width_line(g, line, css_color, debug_dump)
            else:
                render_variable_width_line(g, line, css_color, debug_dump)

    if debug_dump:
        style = ET.SubElement(svg, "style")
        style.text = DEBUG_STYLE

    tree = ET.ElementTree(svg)
    ET.indent(tree, space="  ")
    tree.write(output, encoding="utf-8", xml_declaration=True)
    output.write(b"\n")


def render_to_file(page: Page, path: Path, **kwargs) -> None:
    """Render page to an SVG file."""
    with open(path, "wb") as f:
        render_svg(page, f, **kwargs)
