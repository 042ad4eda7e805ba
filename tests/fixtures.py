"""
Builders for lines file bytes used by the tests.
"""

import struct

HEADER_V3 = b"reMarkable .lines file, version=3"
HEADER_V5 = b"reMarkable .lines file, version=5"


def header(text: bytes) -> bytes:
    """Pad a header to 33 bytes and append the 10 reserved bytes."""
    return text.ljust(33, b" ") + b" " * 10


def point(x=0.0, y=0.0, speed=0.0, direction=0.0, width=2.0, pressure=1.0) -> bytes:
    return struct.pack("<6f", x, y, speed, direction, width, pressure)


def line(points=(), brush=17, color=0, attr1=0, size=2.0, attr2=0, version=5) -> bytes:
    data = struct.pack("<iiif", brush, color, attr1, size)
    if version >= 5:
        data += struct.pack("<i", attr2)
    data += struct.pack("<i", len(points))
    return data + b"".join(points)


def layer(lines=()) -> bytes:
    return struct.pack("<i", len(lines)) + b"".join(lines)


def document(layers=(), version=5) -> bytes:
    text = HEADER_V5 if version == 5 else HEADER_V3
    return header(text) + struct.pack("<i", len(layers)) + b"".join(layers)


def single_line_document(points, brush=17, color=0, version=5) -> bytes:
    """One page, one layer, one line."""
    return document([layer([line(points, brush=brush, color=color, version=version)])],
                    version=version)
