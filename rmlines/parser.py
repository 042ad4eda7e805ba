"""
reMarkable .lines file parser (versions 3 and 5)

Format Overview:
- Header: 33 bytes ASCII, e.g. "reMarkable .lines file, version=5",
  padded with spaces, followed by 10 reserved bytes
- Body: little-endian, counts are int32 and precede their records
- Pages: exactly one per file (no page count field since version 3)
- Lines: brush (i32), color (i32), unknown (i32), base size (f32),
  unknown (i32, version 5 only), then the points
- Points: 24 bytes each (x, y, speed, direction, width, pressure as f32)
"""

from __future__ import annotations

import io
import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Optional

from .brushes import BrushType, Color, brush_type_from_code, color_from_code
from .errors import FormatError

_logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

HEADER_LENGTH = 33
HEADER_PADDING = 10

HEADER_V3 = "reMarkable .lines file, version=3"
HEADER_V5 = "reMarkable .lines file, version=5"
HEADER_LEGACY = "reMarkable lines with selections and layers"

SUPPORTED_HEADERS = {
    HEADER_V3: 3,
    HEADER_V5: 5,
}

# Smallest possible encoding of each record, used to reject impossible counts
MIN_LINE_SIZE = 4 * 4 + 4
POINT_SIZE = 6 * 4

ProgressCallback = Callable[[str, int, int], None]


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class Point:
    """A single sample of a stroke."""
    x: float
    y: float
    speed: float
    direction: float
    width: float
    pressure: float


@dataclass(frozen=True)
class Line:
    """A stroke (line) with brush settings and points."""
    brush_type: BrushType
    color: Color
    unknown_attribute_1: int
    brush_base_size: float
    unknown_attribute_2: int = 0
    points: tuple[Point, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True)
class Layer:
    """A layer containing lines, in drawing order."""
    lines: tuple[Line, ...] = ()


@dataclass(frozen=True)
class Page:
    """A page containing layers, bottom layer first."""
    layers: tuple[Layer, ...] = ()

    def all_lines(self) -> Iterator[Line]:
        """Iterate over all lines in all layers."""
        for layer in self.layers:
            yield from layer.lines


@dataclass(frozen=True)
class Document:
    """Parsed .lines document."""
    version: int
    pages: tuple[Page, ...] = ()

    def all_lines(self) -> Iterator[Line]:
        """Iterate over all lines on all pages."""
        for page in self.pages:
            yield from page.all_lines()


# =============================================================================
# Binary Stream Reader
# =============================================================================

class BinaryReader:
    """Low-level binary reading utilities."""

    def __init__(self, data: BinaryIO):
        self.data = data

    def read_bytes(self, n: int) -> bytes:
        """Read exactly n bytes, raise EOFError if not enough."""
        result = self.data.read(n)
        if len(result) != n:
            raise EOFError(f"Expected {n} bytes, got {len(result)}")
        return result

    def skip(self, n: int) -> None:
        # Read rather than seek so pipes work too
        self.read_bytes(n)

    def read_int32(self) -> int:
        return struct.unpack("<i", self.read_bytes(4))[0]

    def read_float32(self) -> float:
        return struct.unpack("<f", self.read_bytes(4))[0]

    def bytes_remaining(self) -> Optional[int]:
        """Bytes left in the stream, or None if it cannot seek."""
        try:
            if not self.data.seekable():
                return None
            pos = self.data.tell()
            end = self.data.seek(0, io.SEEK_END)
            self.data.seek(pos)
        except (AttributeError, OSError):
            return None
        return end - pos


# =============================================================================
# Decode Context
# =============================================================================

def read_header(stream: BinaryReader) -> int:
    """Read and validate the file header, returning the format version."""
    raw = stream.read_bytes(HEADER_LENGTH)
    header = raw.decode("ascii", errors="replace").rstrip()
    # Only the first 33 bytes of the longer legacy signature are read
    if header == HEADER_LEGACY[:HEADER_LENGTH].rstrip():
        raise FormatError(header, "Unsupported format version")
    try:
        version = SUPPORTED_HEADERS[header]
    except KeyError:
        raise FormatError(header) from None
    return version


class DecodeContext:
    """
    Reader for the record body of a lines file.

    Parts that only exist in some versions are read through
    skip_header_padding(), page_count() and trailing_line_attribute(), the
    only places the version is checked.
    """

    def __init__(self, stream: BinaryReader, version: int,
                 progress: Optional[ProgressCallback] = None):
        self.stream = stream
        self.version = version
        self.progress = progress

    # -------------------------------------------------------------------------
    # Version-dependent fields
    # -------------------------------------------------------------------------

    def skip_header_padding(self) -> None:
        # Since version 3 the ASCII header is followed by 10 reserved bytes
        if self.version >= 3:
            self.stream.skip(HEADER_PADDING)

    def page_count(self) -> int:
        # Since version 3 each file stores a single page and no count
        if self.version >= 3:
            return 1
        return self.stream.read_int32()

    def trailing_line_attribute(self) -> int:
        if self.version >= 5:
            return self.stream.read_int32()
        return 0

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def _read_count(self, kind: str, record_size: int) -> int:
        count = self.stream.read_int32()
        if count > 0:
            remaining = self.stream.bytes_remaining()
            if remaining is not None and count * record_size > remaining:
                raise EOFError(
                    f"{kind} count {count} needs at least {count * record_size} "
                    f"bytes, only {remaining} left"
                )
        _logger.debug("Reading %d %s record(s)", max(count, 0), kind)
        return count

    def _report(self, kind: str, index: int, total: int) -> None:
        if self.progress is not None:
            self.progress(kind, index, total)

    def read_pages(self) -> tuple[Page, ...]:
        num_pages = self.page_count()
        pages = []
        for i in range(num_pages):
            self._report("page", i, num_pages)
            pages.append(Page(layers=self.read_layers()))
        return tuple(pages)

    def read_layers(self) -> tuple[Layer, ...]:
        num_layers = self._read_count("layer", 4)
        layers = []
        for i in range(num_layers):
            self._report("layer", i, num_layers)
            layers.append(Layer(lines=self.read_lines()))
        return tuple(layers)

    def read_lines(self) -> tuple[Line, ...]:
        num_lines = self._read_count("line", MIN_LINE_SIZE)
        lines = []
        for i in range(num_lines):
            self._report("line", i, num_lines)
            lines.append(self.read_line())
        return tuple(lines)

    def read_line(self) -> Line:
        brush_type = brush_type_from_code(self.stream.read_int32())
        color = color_from_code(self.stream.read_int32())
        unknown_attribute_1 = self.stream.read_int32()
        brush_base_size = self.stream.read_float32()
        unknown_attribute_2 = self.trailing_line_attribute()
        return Line(
            brush_type=brush_type,
            color=color,
            unknown_attribute_1=unknown_attribute_1,
            brush_base_size=brush_base_size,
            unknown_attribute_2=unknown_attribute_2,
            points=self.read_points(),
        )

    def read_points(self) -> tuple[Point, ...]:
        num_points = self._read_count("point", POINT_SIZE)
        points = []
        for i in range(num_points):
            self._report("point", i, num_points)
            points.append(self.read_point())
        return tuple(points)

    def read_point(self) -> Point:
        x, y, speed, direction, width, pressure = struct.unpack(
            "<6f", self.stream.read_bytes(POINT_SIZE)
        )
        return Point(x, y, speed, direction, width, pressure)


# =============================================================================
# Document Parser
# =============================================================================

def parse(data: BinaryIO, progress: Optional[ProgressCallback] = None) -> Document:
    """
    Parse a complete lines document from a binary stream.

    Args:
        data: Readable binary stream positioned at the header
        progress: Optional callback called as progress(kind, index, total)
            before each page, layer, line and point record

    Raises:
        FormatError: unknown or unsupported header
        UnknownCodeError: unknown brush type or color code
        EOFError: stream ended early
    """
    stream = BinaryReader(data)
    version = read_header(stream)
    _logger.debug("Lines file version %d", version)
    context = DecodeContext(stream, version, progress)
    context.skip_header_padding()
    return Document(version=version, pages=context.read_pages())


def parse_bytes(data: bytes, **kwargs) -> Document:
    """Parse a lines document held in memory."""
    return parse(io.BytesIO(data), **kwargs)


def parse_file(path: Path, **kwargs) -> Document:
    """Parse a .rm/.lines file."""
    with open(path, "rb") as f:
        return parse(f, **kwargs)


# =============================================================================
# CLI
# =============================================================================

def analyze_file(path: Path) -> None:
    """Analyze a .rm file and print summary."""
    path = Path(path)
    print(f"File: {path.name}")
    print(f"Size: {path.stat().st_size} bytes")
    print()

    doc = parse_file(path)

    lines = list(doc.all_lines())
    total_layers = sum(len(page.layers) for page in doc.pages)
    total_points = sum(len(line.points) for line in lines)

    print(f"Version: {doc.version}")
    print(f"Layers: {total_layers}")
    print(f"Lines: {len(lines)}")
    print(f"Points: {total_points}")

    if lines:
        print("\nBrushes used:")
        for brush in sorted({line.brush_type for line in lines}, key=lambda b: b.value):
            print(f"  - {brush.value}")

        print("\nColors used:")
        for color in sorted({line.color for line in lines}, key=lambda c: c.value):
            print(f"  - {color.name.title()}")


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m rmlines.parser <file.rm>")
        sys.exit(1)

    path = Path(sys.argv[1])
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)

    analyze_file(path)
