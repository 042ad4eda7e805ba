"""
Tests for layer colors and TOML config loading.
"""

import tempfile
import unittest
from pathlib import Path

from rmlines.brushes import Color
from rmlines.config import (
    DEFAULT_TRIPLE, LayerColors, RenderConfig,
    color_to_hex, color_to_pdf, color_to_rgb, load_config, parse_layer_colors,
)
from rmlines.errors import ConfigError


class TestLayerColors(unittest.TestCase):

    def test_defaults(self):
        colors = LayerColors()
        self.assertEqual(len(colors.colors), 5)
        self.assertEqual(colors.color_for(0, Color.BLACK), "black")
        self.assertEqual(colors.color_for(4, Color.GREY), "gray")

    def test_indexed_by_color(self):
        colors = parse_layer_colors("black,gray,white;navy,#0a0,#fff")
        self.assertEqual(colors.color_for(1, Color.BLACK), "navy")
        self.assertEqual(colors.color_for(1, Color.GREY), "#0a0")
        self.assertEqual(colors.color_for(1, Color.WHITE), "#fff")

    def test_unconfigured_layer(self):
        colors = parse_layer_colors("red,green,blue")
        self.assertEqual(colors.color_for(3, Color.WHITE), DEFAULT_TRIPLE[2])

    def test_wrong_color_count(self):
        with self.assertRaises(ConfigError):
            parse_layer_colors("black,gray,white;red,green")

    def test_unknown_color_rejected(self):
        with self.assertRaises(ConfigError):
            parse_layer_colors("black,gray,white;teal,gray,white")
        with self.assertRaises(ConfigError):
            LayerColors((("black", "gray", "#12"),))


class TestColorConversion(unittest.TestCase):

    def test_named(self):
        self.assertEqual(color_to_rgb("Black"), (0, 0, 0))
        self.assertEqual(color_to_hex("white"), "#ffffff")

    def test_hex(self):
        self.assertEqual(color_to_rgb("#ff8000"), (255, 128, 0))
        self.assertEqual(color_to_rgb("#f80"), (255, 136, 0))

    def test_pdf_range(self):
        self.assertEqual(color_to_pdf("#ff0000"), (1.0, 0.0, 0.0))

    def test_invalid(self):
        for value in ("nocolor", "#12", "#gggggg"):
            with self.assertRaises(ConfigError):
                color_to_rgb(value)


class TestLoadConfig(unittest.TestCase):

    def write(self, text: str) -> Path:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        path = Path(tmp.name) / "rmlines.toml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_full(self):
        config = load_config(self.write(
            '[render]\n'
            'auto_crop = false\n'
            'debug_dump = true\n'
            '[colors]\n'
            'layers = [["blue", "red", "white"]]\n'
            '[xfdf]\n'
            'highlight_color = "#00ff00"\n'
        ))
        self.assertFalse(config.auto_crop)
        self.assertTrue(config.debug_dump)
        self.assertEqual(config.layer_colors.colors, (("blue", "red", "white"),))
        self.assertEqual(config.highlight_color, "#00ff00")

    def test_empty_file_uses_defaults(self):
        self.assertEqual(load_config(self.write("")), RenderConfig())

    def test_wrong_type(self):
        with self.assertRaises(ConfigError):
            load_config(self.write('[render]\nauto_crop = "yes"\n'))

    def test_bad_layers(self):
        with self.assertRaises(ConfigError):
            load_config(self.write('[colors]\nlayers = [["blue", "red"]]\n'))

    def test_unknown_layer_color(self):
        with self.assertRaises(ConfigError):
            load_config(self.write('[colors]\nlayers = [["blue", "red", "chartreuse"]]\n'))

    def test_invalid_toml(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("[render\n"))


if __name__ == "__main__":
    unittest.main()
