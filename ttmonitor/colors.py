"""Colour palette and value-to-colour mappings for the displays."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional, Union

__all__ = [
    "Rgb",
    "Indexed",
    "Rgba",
    "Color",
    "PRIMARY",
    "SECONDARY",
    "PRIMARY_DARK",
    "SUCCESS",
    "SUCCESS_BG",
    "ERROR",
    "ERROR_BG",
    "WARNING",
    "BACKGROUND",
    "TEXT_PRIMARY",
    "TEXT_SECONDARY",
    "BORDER",
    "INFO",
    "truecolor_supported",
    "temp_color",
    "power_color",
    "health_color",
    "temp_to_hue",
]


@dataclass(frozen=True)
class Rgb:
    """24-bit terminal colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")


@dataclass(frozen=True)
class Indexed:
    """Entry of the 256-colour terminal palette."""

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index <= 255:
            raise ValueError(f"palette index out of range: {self.index}")


@dataclass(frozen=True)
class Rgba:
    """Floating-point colour with alpha, channels in 0.0-1.0."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> Rgba:
        return cls(r, g, b, 1.0)

    def with_alpha(self, alpha: float) -> Rgba:
        return replace(self, a=alpha)


Color = Union[Rgb, Indexed]

# None means "terminal default".
PRIMARY = Rgb(120, 150, 255)
SECONDARY = Rgb(150, 120, 200)
PRIMARY_DARK = Rgb(100, 130, 220)
SUCCESS = Rgb(80, 220, 200)
SUCCESS_BG: Optional[Color] = None
ERROR = Rgb(255, 100, 100)
ERROR_BG: Optional[Color] = None
WARNING = Rgb(255, 180, 100)
BACKGROUND: Optional[Color] = None
TEXT_PRIMARY = Rgb(220, 220, 220)
TEXT_SECONDARY = Rgb(160, 160, 160)
BORDER = Rgb(100, 100, 120)
INFO = Rgb(100, 180, 255)

_TEMP_TRUECOLOR = (Rgb(80, 220, 220), Rgb(150, 220, 100), Rgb(255, 180, 100), Rgb(255, 100, 100))
_TEMP_INDEXED = (Indexed(51), Indexed(226), Indexed(214), Indexed(196))
_POWER_TRUECOLOR = (Rgb(80, 220, 200), Rgb(100, 180, 255), Rgb(255, 180, 100), Rgb(255, 100, 100))
_POWER_INDEXED = (Indexed(51), Indexed(75), Indexed(214), Indexed(196))


def truecolor_supported() -> bool:
    """True if COLORTERM advertises 24-bit colour."""
    return os.environ.get("COLORTERM") in ("truecolor", "24bit")


def _band(value: float, limits: tuple[float, float, float]) -> int:
    return next((i for i, limit in enumerate(limits) if value < limit), len(limits))


def temp_color(temp_c: float) -> Color:
    """Cool-to-hot colour for a temperature (breaks at 45, 65, 80 °C)."""
    palette = _TEMP_TRUECOLOR if truecolor_supported() else _TEMP_INDEXED
    return palette[_band(temp_c, (45.0, 65.0, 80.0))]


def power_color(power_w: float) -> Color:
    """Colour for a power level (breaks at 50, 100, 150 W)."""
    palette = _POWER_TRUECOLOR if truecolor_supported() else _POWER_INDEXED
    return palette[_band(power_w, (50.0, 100.0, 150.0))]


def health_color(is_healthy: bool) -> Color:
    return SUCCESS if is_healthy else ERROR


def temp_to_hue(temp_c: float) -> float:
    """Hue in degrees: cyan when cold, through yellow and orange, red when hot."""
    if temp_c < 40.0:
        return 180.0
    if temp_c < 60.0:
        return 180.0 - ((temp_c - 40.0) / 20.0) * 120.0
    if temp_c < 80.0:
        return 60.0 - ((temp_c - 60.0) / 20.0) * 30.0
    return 0.0