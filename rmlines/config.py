"""
Render configuration: per-layer colors and an optional TOML config file.

Example config:

    [render]
    auto_crop = true
    debug_dump = false

    [colors]
    layers = [["black", "gray", "white"], ["blue", "red", "white"]]

    [xfdf]
    highlight_color = "#ffff00"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import tomli

from .brushes import Color
from .constants import COLOR_MAP_RGB, DEFAULT_HIGHLIGHT_COLOR
from .errors import ConfigError

ColorTriple = tuple[str, str, str]

DEFAULT_TRIPLE: ColorTriple = ("black", "gray", "white")
DEFAULT_LAYER_COUNT = 5


@dataclass(frozen=True)
class LayerColors:
    """Dark/medium/light colors for each layer, bottom layer first."""
    colors: tuple[ColorTriple, ...] = (DEFAULT_TRIPLE,) * DEFAULT_LAYER_COUNT

    def __post_init__(self):
        # Every renderer must accept every configured color
        for triple in self.colors:
            for css in triple:
                color_to_rgb(css)

    def color_for(self, layer_index: int, color: Color) -> str:
        if 0 <= layer_index < len(self.colors):
            triple = self.colors[layer_index]
        else:
            triple = DEFAULT_TRIPLE
        return triple[color.value]


@dataclass(frozen=True)
class RenderConfig:
    layer_colors: LayerColors = field(default_factory=LayerColors)
    auto_crop: bool = True
    debug_dump: bool = False
    highlight_color: str = DEFAULT_HIGHLIGHT_COLOR


def _triple(values) -> ColorTriple:
    colors = [str(c).strip() for c in values]
    if len(colors) != 3 or not all(colors):
        raise ConfigError(f"Expected 3 colors per layer. Found: {','.join(colors)}")
    return (colors[0], colors[1], colors[2])


def parse_layer_colors(text: str) -> LayerColors:
    """Parse "black,gray,white;red,green,blue" into LayerColors."""
    return LayerColors(tuple(_triple(layer.split(",")) for layer in text.split(";")))


def load_config(path: Path) -> RenderConfig:
    """Read a TOML render config. Missing keys keep their defaults."""
    with open(path, "rb") as f:
        try:
            data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"{path}: {e}") from e

    render = data.get("render", {})
    colors = data.get("colors", {})
    xfdf = data.get("xfdf", {})
    defaults = RenderConfig()

    auto_crop = render.get("auto_crop", defaults.auto_crop)
    debug_dump = render.get("debug_dump", defaults.debug_dump)
    for key, value in (("auto_crop", auto_crop), ("debug_dump", debug_dump)):
        if not isinstance(value, bool):
            raise ConfigError(f"render.{key} must be true or false")

    layer_colors = defaults.layer_colors
    if "layers" in colors:
        layers = colors["layers"]
        if not isinstance(layers, list) or not all(isinstance(l, list) for l in layers):
            raise ConfigError("colors.layers must be a list of 3-color lists")
        layer_colors = LayerColors(tuple(_triple(layer) for layer in layers))

    highlight_color = xfdf.get("highlight_color", defaults.highlight_color)
    if not isinstance(highlight_color, str):
        raise ConfigError("xfdf.highlight_color must be a string")
    color_to_rgb(highlight_color)

    return RenderConfig(
        layer_colors=layer_colors,
        auto_crop=auto_crop,
        debug_dump=debug_dump,
        highlight_color=highlight_color,
    )


# =============================================================================
# Color Conversion
# =============================================================================

def color_to_rgb(css: str) -> tuple[int, int, int]:
    """Convert "#rgb", "#rrggbb" or a known color name to 0-255 RGB."""
    value = css.strip().lower()
    if value in COLOR_MAP_RGB:
        return COLOR_MAP_RGB[value]
    if value.startswith("#"):
        digits = value[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        if len(digits) == 6:
            try:
                return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
            except ValueError:
                pass
    raise ConfigError(f"Unsupported color: {css!r}")


def color_to_hex(css: str) -> str:
    r, g, b = color_to_rgb(css)
    return f"#{r:02x}{g:02x}{b:02x}"


def color_to_pdf(css: str) -> tuple[float, float, float]:
    """RGB color (0-1 range), as PyMuPDF expects."""
    r, g, b = color_to_rgb(css)
    return (r / 255, g / 255, b / 255)
