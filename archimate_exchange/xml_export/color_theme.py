"""Color themes for visual elements.

A theme is a lookup from element type to (fill, line, text) colors. Three
presets are table driven; a custom table can replace or extend any of them.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from archimate_exchange.errors import UnknownElementTypeError, UnknownThemeError
from archimate_exchange.models.archimate import ELEMENT_LAYERS, ElementType, Layer


@dataclass(frozen=True)
class ColorMapping:
    fill: str
    line: str
    text: str

    def rgb(self, which: str) -> Tuple[int, int, int]:
        return hex_to_rgb(getattr(self, which))

    @classmethod
    def from_value(cls, value: Union["ColorMapping", Mapping[str, str]]) -> "ColorMapping":
        if isinstance(value, ColorMapping):
            return value
        return cls(
            fill=value.get("fill") or value.get("fillColor") or "#FFFFFF",
            line=value.get("line") or value.get("lineColor") or "#000000",
            text=value.get("text") or value.get("textColor") or "#000000",
        )


DEFAULT_COLORS = ColorMapping(fill="#FFFFFF", line="#000000", text="#000000")

LAYER_COLORS: Mapping[Layer, ColorMapping] = {
    Layer.MOTIVATION: ColorMapping("#E6D3FF", "#8B66CC", "#000000"),
    Layer.STRATEGY: ColorMapping("#D1E7FF", "#5B9BD5", "#000000"),
    Layer.BUSINESS: ColorMapping("#FFFACD", "#FFD700", "#000000"),
    Layer.APPLICATION: ColorMapping("#E6FFE6", "#70AD47", "#000000"),
    Layer.TECHNOLOGY: ColorMapping("#FFE6CC", "#C5504B", "#000000"),
    Layer.PHYSICAL: ColorMapping("#F2F2F2", "#7F7F7F", "#000000"),
    Layer.IMPLEMENTATION: ColorMapping("#FFCCCB", "#FF6B6B", "#000000"),
}

ARCHIMATE_COLORS: Mapping[ElementType, ColorMapping] = {
    element_type: LAYER_COLORS[layer] for element_type, layer in ELEMENT_LAYERS.items()
}

MONOCHROME_COLORS = ColorMapping("#F5F5F5", "#333333", "#000000")
HIGH_CONTRAST_COLORS = ColorMapping("#FFFFFF", "#000000", "#000000")

ThemeSpec = Union["ColorTheme", str, Mapping[Any, Any]]


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    raw = value.strip().lstrip("#")
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6:
        raise ValueError(f"Invalid hex color: {value}")
    return int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)


def _theme_key(value: Union[ElementType, str]) -> ElementType:
    if isinstance(value, ElementType):
        return value
    try:
        return ElementType(value)
    except ValueError as exc:
        raise UnknownElementTypeError(str(value)) from exc


class ColorTheme:
    def __init__(self, custom_mappings: Optional[Mapping[Any, Any]] = None):
        self._mappings: Dict[ElementType, ColorMapping] = dict(ARCHIMATE_COLORS)
        if custom_mappings:
            for element_type, colors in custom_mappings.items():
                if colors:
                    self._mappings[_theme_key(element_type)] = ColorMapping.from_value(colors)

    def colors_for(self, element_type: ElementType) -> ColorMapping:
        return self._mappings.get(element_type, DEFAULT_COLORS)

    def fill_color(self, element_type: ElementType) -> str:
        return self.colors_for(element_type).fill

    def line_color(self, element_type: ElementType) -> str:
        return self.colors_for(element_type).line

    def text_color(self, element_type: ElementType) -> str:
        return self.colors_for(element_type).text

    def set_element_colors(self, element_type: ElementType, colors: Union[ColorMapping, Mapping[str, str]]) -> None:
        self._mappings[_theme_key(element_type)] = ColorMapping.from_value(colors)

    def reset_to_defaults(self) -> None:
        self._mappings = dict(ARCHIMATE_COLORS)

    def export_theme(self) -> Dict[str, Dict[str, str]]:
        return {element_type.value: asdict(colors) for element_type, colors in self._mappings.items()}

    def import_theme(self, theme_data: Mapping[str, Any]) -> None:
        """Replace the whole mapping; types missing from ``theme_data`` fall back to white/black."""
        self._mappings = {
            _theme_key(element_type): ColorMapping.from_value(colors)
            for element_type, colors in theme_data.items()
        }

    @classmethod
    def archimate(cls) -> "ColorTheme":
        return cls()

    @classmethod
    def monochrome(cls) -> "ColorTheme":
        return cls({element_type: MONOCHROME_COLORS for element_type in ElementType})

    @classmethod
    def high_contrast(cls) -> "ColorTheme":
        return cls({element_type: HIGH_CONTRAST_COLORS for element_type in ElementType})

    @classmethod
    def from_name(cls, name: str) -> "ColorTheme":
        factory = THEME_PRESETS.get((name or "").strip().lower())
        if factory is None:
            raise UnknownThemeError(name)
        return factory()

    @classmethod
    def resolve(cls, theme: ThemeSpec) -> "ColorTheme":
        """Accept a preset name, a custom type -> colors table, or a theme instance."""
        if isinstance(theme, ColorTheme):
            return theme
        if isinstance(theme, str):
            return cls.from_name(theme)
        return cls(theme)


THEME_PRESETS = {
    "archimate": ColorTheme.archimate,
    "monochrome": ColorTheme.monochrome,
    "high-contrast": ColorTheme.high_contrast,
}
