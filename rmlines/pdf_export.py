"""
PDF Export for lines documents.

Draws pages onto blank PDF pages, or overlays them on the original PDF
of a document bundle.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import fitz  # PyMuPDF

from .parser import Line, Page
from .config import LayerColors, color_to_pdf
from .constants import REMARKABLE_WIDTH, REMARKABLE_HEIGHT, RM_TO_PDF_SCALE
from .geometry import (
    StrokeKind,
    stroke_kind,
    is_rendered,
    constant_width,
    line_cap,
    line_opacity,
    variable_segments,
)

_logger = logging.getLogger(__name__)

LINE_CAPS = {"butt": 0, "round": 1}


def fit_scale(page_rect: fitz.Rect) -> float:
    """PDF points per lines unit when the page is fitted into the screen."""
    return max(page_rect.width / REMARKABLE_WIDTH, page_rect.height / REMARKABLE_HEIGHT)


def draw_line_on_page(shape: fitz.Shape, line: Line, color: tuple[float, float, float],
                      scale: float) -> int:
    """Draw a line using Shape for batched rendering. Returns paths finished."""
    if not is_rendered(line):
        return 0

    def pt(p) -> fitz.Point:
        return fitz.Point(p.x * scale, p.y * scale)

    if stroke_kind(line.brush_type) is StrokeKind.CONSTANT:
        pdf_points = [pt(p) for p in line.points]
        # Draw each line segment individually (avoids polyline spaghetti issue)
        for i in range(len(pdf_points) - 1):
            shape.draw_line(pdf_points[i], pdf_points[i + 1])
        if len(pdf_points) == 1:
            shape.draw_line(pdf_points[0], pdf_points[0])
        shape.finish(color=color, width=constant_width(line) * scale,
                     lineCap=LINE_CAPS[line_cap(line.brush_type)], lineJoin=1,
                     stroke_opacity=line_opacity(line.brush_type), closePath=False)
        return 1

    finished = 0
    for segment in variable_segments(line):
        shape.draw_line(pt(segment.start), pt(segment.end))
        shape.finish(color=color, width=segment.width * scale, lineCap=1, lineJoin=1,
                     stroke_opacity=min(segment.opacity, 1.0), closePath=False)
        finished += 1
    return finished


def draw_page(pdf_page: fitz.Page, page: Page, layer_colors: LayerColors,
              scale: float) -> int:
    """Draw all layers of a page, bottom layer first."""
    shape = pdf_page.new_shape()
    drawn = 0
    for layer_id, layer in enumerate(page.layers):
        for line in layer.lines:
            color = color_to_pdf(layer_colors.color_for(layer_id, line.color))
            drawn += draw_line_on_page(shape, line, color, scale)
    shape.commit()  # Single commit per page for performance
    return drawn


def render_pdf(
    pages: Sequence[Page],
    output_path: Path,
    layer_colors: LayerColors | None = None,
    base_pdf: Optional[Path] = None,
) -> int:
    """
    Render pages to a PDF file.

    Args:
        pages: Parsed pages
        output_path: Output PDF path
        layer_colors: Colors per layer (default: black/gray/white)
        base_pdf: Original PDF to draw onto; extra lines pages are dropped

    Returns:
        Number of paths drawn
    """
    if layer_colors is None:
        layer_colors = LayerColors()
    output_path = Path(output_path)

    pdf = fitz.open(str(base_pdf)) if base_pdf is not None else fitz.open()
    drawn = 0
    try:
        if base_pdf is not None:
            if len(pages) > len(pdf):
                _logger.debug("Dropping %d page(s) beyond the end of %s",
                              len(pages) - len(pdf), base_pdf)
            for pdf_page, page in zip(pdf, pages):
                drawn += draw_page(pdf_page, page, layer_colors, fit_scale(pdf_page.rect))
        else:
            scale = 1 / RM_TO_PDF_SCALE
            for page in pages:
                pdf_page = pdf.new_page(width=REMARKABLE_WIDTH * scale,
                                        height=REMARKABLE_HEIGHT * scale)
                drawn += draw_page(pdf_page, page, layer_colors, scale)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf.ez_save(str(output_path))
    finally:
        pdf.close()

    return drawn
