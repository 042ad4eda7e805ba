"""
Tests for decoding version 3 and 5 lines files.
"""

import io
import struct
import unittest

from rmlines.brushes import BrushType, Color
from rmlines.errors import FormatError, UnknownCodeError
from rmlines.parser import (
    BinaryReader, DecodeContext, Point, parse, parse_bytes, parse_file, read_header,
)

from tests import fixtures as fx


class NonSeekable(io.RawIOBase):
    """Pipe-like stream: readable, not seekable."""

    def __init__(self, data: bytes):
        self._data = io.BytesIO(data)

    def readable(self):
        return True

    def readinto(self, b):
        chunk = self._data.read(len(b))
        b[:len(chunk)] = chunk
        return len(chunk)


class TestHeader(unittest.TestCase):

    def test_version_3(self):
        doc = parse_bytes(fx.document(version=3))
        self.assertEqual(doc.version, 3)

    def test_version_5(self):
        doc = parse_bytes(fx.document(version=5))
        self.assertEqual(doc.version, 5)

    def test_legacy_header_rejected(self):
        data = b"reMarkable lines with selections and layers" + struct.pack("<i", 1)
        with self.assertRaises(FormatError) as ctx:
            parse_bytes(data)
        self.assertEqual(ctx.exception.header, "reMarkable lines with selections")
        self.assertIn("Unsupported", str(ctx.exception))

    def test_unrecognized_header(self):
        data = fx.header(b"reMarkable .lines file, version=6") + struct.pack("<i", 0)
        with self.assertRaises(FormatError) as ctx:
            parse_bytes(data)
        self.assertEqual(ctx.exception.header, "reMarkable .lines file, version=6")

    def test_binary_garbage_header(self):
        with self.assertRaises(FormatError):
            parse_bytes(b"\xff" * 60)

    def test_short_header(self):
        with self.assertRaises(EOFError):
            parse_bytes(b"reMarkable")

    def test_missing_padding(self):
        with self.assertRaises(EOFError):
            parse_bytes(fx.HEADER_V5 + b"  ")

    def test_header_leaves_padding_to_context(self):
        stream = BinaryReader(io.BytesIO(fx.HEADER_V3 + b" " * 10 + struct.pack("<i", 0)))
        context = DecodeContext(stream, read_header(stream))
        self.assertEqual(context.version, 3)
        context.skip_header_padding()
        self.assertEqual(context.read_layers(), ())
        self.assertEqual(stream.bytes_remaining(), 0)


class TestStructure(unittest.TestCase):

    def test_single_page(self):
        for version in (3, 5):
            doc = parse_bytes(fx.document([fx.layer(), fx.layer()], version=version))
            self.assertEqual(len(doc.pages), 1)
            self.assertEqual(len(doc.pages[0].layers), 2)

    def test_layer_line_point_hierarchy(self):
        data = fx.document([
            fx.layer([
                fx.line([fx.point(1, 2), fx.point(3, 4)], brush=15, color=1),
                fx.line([], brush=6),
            ]),
            fx.layer([fx.line([fx.point(5, 6)], brush=18, color=2)]),
        ])
        page = parse_bytes(data).pages[0]
        first, second = page.layers
        self.assertEqual([l.brush_type for l in first.lines],
                         [BrushType.BALLPOINT, BrushType.ERASER])
        self.assertEqual(first.lines[0].color, Color.GREY)
        self.assertEqual([(p.x, p.y) for p in first.lines[0].points], [(1.0, 2.0), (3.0, 4.0)])
        self.assertTrue(first.lines[1].is_empty)
        self.assertEqual(second.lines[0].brush_type, BrushType.HIGHLIGHTER)
        self.assertEqual(second.lines[0].color, Color.WHITE)

    def test_point_fields_in_order(self):
        data = fx.single_line_document([fx.point(1.5, 2.5, 3.5, 4.5, 5.5, 0.25)])
        p = parse_bytes(data).pages[0].layers[0].lines[0].points[0]
        self.assertEqual(p, Point(x=1.5, y=2.5, speed=3.5, direction=4.5, width=5.5, pressure=0.25))

    def test_version_5_trailing_attribute(self):
        data = fx.document([fx.layer([fx.line([fx.point()], attr1=7, size=1.5, attr2=42)])])
        line = parse_bytes(data).pages[0].layers[0].lines[0]
        self.assertEqual(line.unknown_attribute_1, 7)
        self.assertEqual(line.brush_base_size, 1.5)
        self.assertEqual(line.unknown_attribute_2, 42)
        self.assertEqual(len(line.points), 1)

    def test_version_3_has_no_trailing_attribute(self):
        data = fx.document([fx.layer([fx.line([fx.point(9, 9)], attr1=-3, version=3)])],
                           version=3)
        line = parse_bytes(data).pages[0].layers[0].lines[0]
        self.assertEqual(line.unknown_attribute_1, -3)
        self.assertEqual(line.unknown_attribute_2, 0)
        self.assertEqual(line.points[0].x, 9.0)

    def test_negative_count_reads_nothing(self):
        data = fx.header(fx.HEADER_V5) + struct.pack("<i", -5)
        self.assertEqual(parse_bytes(data).pages[0].layers, ())

    def test_model_is_immutable(self):
        doc = parse_bytes(fx.single_line_document([fx.point()]))
        with self.assertRaises(AttributeError):
            doc.pages[0].layers[0].lines[0].points[0].x = 1.0


class TestFailures(unittest.TestCase):

    def test_unknown_brush(self):
        with self.assertRaises(UnknownCodeError) as ctx:
            parse_bytes(fx.single_line_document([fx.point()], brush=99))
        self.assertEqual(ctx.exception.code, 99)

    def test_unknown_color(self):
        with self.assertRaises(UnknownCodeError) as ctx:
            parse_bytes(fx.single_line_document([fx.point()], color=5))
        self.assertEqual(ctx.exception.code, 5)

    def test_truncated_point(self):
        data = fx.single_line_document([fx.point(1, 1), fx.point(2, 2)])
        with self.assertRaises(EOFError):
            parse_bytes(data[:-4])

    def test_count_larger_than_stream(self):
        data = fx.header(fx.HEADER_V5) + struct.pack("<i", 1) + struct.pack("<i", 1_000_000)
        with self.assertRaises(EOFError):
            parse_bytes(data)

    def test_truncated_non_seekable_stream(self):
        data = fx.single_line_document([fx.point(), fx.point()])
        with self.assertRaises(EOFError):
            parse(io.BufferedReader(NonSeekable(data[:-1])))

    def test_non_seekable_stream(self):
        data = fx.single_line_document([fx.point(), fx.point()])
        doc = parse(io.BufferedReader(NonSeekable(data)))
        self.assertEqual(len(doc.pages[0].layers[0].lines[0].points), 2)


class TestProgress(unittest.TestCase):

    def test_progress_callback(self):
        events = []
        data = fx.single_line_document([fx.point(), fx.point()])
        parse_bytes(data, progress=lambda kind, i, total: events.append((kind, i, total)))
        self.assertEqual(events, [
            ("page", 0, 1),
            ("layer", 0, 1),
            ("line", 0, 1),
            ("point", 0, 2),
            ("point", 1, 2),
        ])


class TestParseFile(unittest.TestCase):

    def test_parse_file(self):
        import tempfile
        from pathlib import Path

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "page.rm"
            path.write_bytes(fx.single_line_document([fx.point(1, 2)], version=3))
            doc = parse_file(path)
        self.assertEqual(doc.version, 3)
        self.assertEqual(next(doc.all_lines()).points[0].y, 2.0)


if __name__ == "__main__":
    unittest.main()
