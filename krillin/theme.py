"""Colour palettes and sizes of the desktop theme."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ThemeVariant(Enum):
    LIGHT = "light"
    DARK = "dark"


class ColorName(Enum):
    PRIMARY = "primary"
    BACKGROUND = "background"
    FOREGROUND = "foreground"
    DISABLED = "disabled"
    BUTTON = "button"
    HOVER = "hover"
    PRESSED = "pressed"
    INPUT_BACKGROUND = "inputBackground"
    INPUT_BORDER = "inputBorder"
    PLACEHOLDER = "placeholder"
    SELECTION = "selection"
    SCROLL_BAR = "scrollBar"
    SHADOW = "shadow"
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"
    FOCUS = "focus"


class SizeName(Enum):
    PADDING = "padding"
    INLINE_ICON = "iconInline"
    SCROLL_BAR = "scrollBar"
    SCROLL_BAR_SMALL = "scrollBarSmall"
    SEPARATOR_THICKNESS = "separator"
    TEXT = "text"
    INPUT_BORDER = "inputBorder"
    INPUT_RADIUS = "inputRadius"


@dataclass(frozen=True)
class Color:
    """A non-premultiplied RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255


_LIGHT: dict[ColorName, Color] = {
    ColorName.PRIMARY: Color(100, 150, 240, 255),
    ColorName.BACKGROUND: Color(248, 249, 252, 255),
    ColorName.FOREGROUND: Color(30, 35, 45, 255),
    ColorName.DISABLED: Color(180, 185, 190, 150),
    ColorName.BUTTON: Color(70, 130, 230, 255),
    ColorName.HOVER: Color(90, 150, 240, 255),
    ColorName.PRESSED: Color(50, 110, 210, 255),
    ColorName.INPUT_BACKGROUND: Color(255, 255, 255, 255),
    ColorName.INPUT_BORDER: Color(210, 215, 220, 255),
    ColorName.PLACEHOLDER: Color(160, 165, 170, 200),
    ColorName.SELECTION: Color(200, 225, 255, 180),
    ColorName.SCROLL_BAR: Color(200, 205, 210, 200),
    ColorName.SHADOW: Color(0, 0, 0, 25),
    ColorName.ERROR: Color(230, 70, 70, 255),
    ColorName.WARNING: Color(245, 160, 50, 255),
    ColorName.SUCCESS: Color(60, 180, 120, 255),
    ColorName.FOCUS: Color(70, 130, 230, 100),
}

_DARK: dict[ColorName, Color] = {
    ColorName.PRIMARY: Color(90, 150, 250, 255),
    ColorName.BACKGROUND: Color(20, 22, 30, 255),
    ColorName.FOREGROUND: Color(230, 235, 240, 255),
    ColorName.DISABLED: Color(100, 105, 110, 150),
    ColorName.BUTTON: Color(50, 55, 65, 255),
    ColorName.HOVER: Color(70, 75, 85, 255),
    ColorName.PRESSED: Color(30, 35, 45, 255),
    ColorName.INPUT_BACKGROUND: Color(35, 38, 48, 255),
    ColorName.INPUT_BORDER: Color(60, 65, 75, 255),
    ColorName.PLACEHOLDER: Color(120, 125, 130, 200),
    ColorName.SELECTION: Color(70, 130, 230, 180),
    ColorName.SCROLL_BAR: Color(60, 65, 75, 200),
    ColorName.SHADOW: Color(0, 0, 0, 50),
    ColorName.ERROR: Color(240, 80, 80, 255),
    ColorName.WARNING: Color(255, 170, 60, 255),
    ColorName.SUCCESS: Color(70, 190, 130, 255),
    ColorName.FOCUS: Color(80, 140, 240, 100),
}

_SIZES: dict[SizeName, float] = {
    SizeName.PADDING: 10.0,
    SizeName.INLINE_ICON: 20.0,
    SizeName.SCROLL_BAR: 10.0,
    SizeName.SCROLL_BAR_SMALL: 4.0,
    SizeName.SEPARATOR_THICKNESS: 1.0,
    SizeName.TEXT: 14.0,
    SizeName.INPUT_BORDER: 1.5,
    SizeName.INPUT_RADIUS: 5.0,
}


@dataclass(frozen=True)
class CustomTheme:
    """Application theme; ``force_dark`` uses the dark palette for every variant."""

    force_dark: bool = False

    def color(
        self, name: ColorName | str, variant: ThemeVariant = ThemeVariant.LIGHT
    ) -> Color:
        """Return the colour for ``name``; raise ValueError for an unknown name."""
        dark = self.force_dark or ThemeVariant(variant) is ThemeVariant.DARK
        palette = _DARK if dark else _LIGHT
        return palette[ColorName(name)]

    def size(self, name: SizeName | str) -> float:
        """Return the size for ``name``; raise ValueError for an unknown name."""
        return _SIZES[SizeName(name)]