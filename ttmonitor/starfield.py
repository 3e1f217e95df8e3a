"""Starfield view of a device's Tensix grid, and a simple line chart."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ttmonitor.colors import Rgba, temp_to_hue
from ttmonitor.device import Device
from ttmonitor.history import TelemetryHistory

__all__ = ["Star", "StarfieldVisualization", "LineChart", "hsv_to_rgb"]

_CONNECT_DISTANCE = 0.15
_MAX_POWER_W = 200.0

_CHART_MARGIN_TOP = 30.0
_CHART_MARGIN_BOTTOM = 20.0
_CHART_MARGIN_LEFT = 50.0
_CHART_MARGIN_RIGHT = 10.0
_CHART_GRID_LINES = 5


def hsv_to_rgb(h: float, s: float, v: float) -> Rgba:
    """Convert hue (degrees), saturation and value to an opaque colour."""
    c = v * s
    h_prime = h / 60.0
    x = c * (1.0 - abs(math.fmod(h_prime, 2.0) - 1.0)) if math.isfinite(h_prime) else math.nan
    m = v - c
    sector = int(h_prime) if math.isfinite(h_prime) else 0
    r, g, b = {
        0: (c, x, 0.0),
        1: (x, c, 0.0),
        2: (0.0, c, x),
        3: (0.0, x, c),
        4: (x, 0.0, c),
        5: (c, 0.0, x),
    }.get(sector, (c, x, 0.0))
    return Rgba.from_rgb(r + m, g + m, b + m)


@dataclass
class Star:
    """One Tensix core, placed in normalised 0.0-1.0 coordinates."""

    x: float
    y: float
    brightness: float
    phase: float
    hue: float

    def color(self) -> Rgba:
        """Current colour of the star."""
        return hsv_to_rgb(self.hue, 0.8, self.brightness)


def _stars_for(device: Device) -> list[Star]:
    rows, cols = device.tensix_grid()
    return [
        Star(
            x=(col + 0.5) / cols,
            y=(row + 0.5) / rows,
            brightness=0.5,
            phase=(row * cols + col) * 0.1,
            hue=float((col * 30 + row * 20) % 360),
        )
        for row in range(rows)
        for col in range(cols)
    ]


class StarfieldVisualization:
    """Animated stars, one per Tensix core, driven by device telemetry."""

    def __init__(self, device: Device) -> None:
        self.device = device
        self.frame = 0
        self.stars: list[Star] = _stars_for(device)

    def update(self, history: Optional[TelemetryHistory]) -> None:
        """Advance one frame; brightness and hue follow the latest sample if any."""
        self.frame += 1
        if history is not None:
            power = history.latest_power()
            temp = history.latest_temp()
            current = history.latest_current()
            activity = max(0.0, min(power / _MAX_POWER_W, 1.0))
            hue_shift = temp_to_hue(temp)
            for star in self.stars:
                star.phase += 0.05 + current / 100.0
                twinkle = (math.sin(star.phase) * 0.5 + 0.5) * 0.3
                star.brightness = 0.3 + activity * 0.5 + twinkle
                star.hue = math.fmod(star.hue + 2.0, 360.0) + hue_shift * 0.3
        else:
            for star in self.stars:
                star.phase += 0.02
                twinkle = (math.sin(star.phase) * 0.5 + 0.5) * 0.3
                star.brightness = 0.4 + twinkle
                star.hue = math.fmod(star.hue + 1.0, 360.0)

    def connections(self) -> list[tuple[int, int, float]]:
        """Pairs of nearby stars as (i, j, alpha) with i < j."""
        result = []
        for i, first in enumerate(self.stars):
            for j in range(i + 1, len(self.stars)):
                second = self.stars[j]
                distance = math.hypot(first.x - second.x, first.y - second.y)
                if distance < _CONNECT_DISTANCE:
                    alpha = (1.0 - distance / _CONNECT_DISTANCE) * 0.2
                    brightness = (first.brightness + second.brightness) / 2.0
                    result.append((i, j, alpha * brightness))
        return result


@dataclass
class LineChart:
    """A titled series of values plotted against a fixed value range."""

    title: str
    data: list[float] = field(default_factory=list)
    value_range: tuple[float, float] = (0.0, 1.0)
    color: Rgba = field(default_factory=lambda: Rgba.from_rgb(1.0, 1.0, 1.0))

    def update(self, data: Sequence[float], value_range: tuple[float, float]) -> None:
        """Replace the data and its range."""
        self.data = list(data)
        self.value_range = value_range

    def points(self, width: float, height: float) -> list[tuple[float, float]]:
        """Pixel coordinates of the line in a width x height area.

        Empty when there are fewer than two values or no room to draw.
        """
        chart_width = width - _CHART_MARGIN_LEFT - _CHART_MARGIN_RIGHT
        chart_height = height - _CHART_MARGIN_TOP - _CHART_MARGIN_BOTTOM
        if len(self.data) < 2 or chart_width <= 0.0 or chart_height <= 0.0:
            return []
        low, high = self.value_range
        last = len(self.data) - 1
        result = []
        for i, value in enumerate(self.data):
            x = _CHART_MARGIN_LEFT + (i / last) * chart_width
            if high > low:
                normalized = max(0.0, min((value - low) / (high - low), 1.0))
            else:
                normalized = 0.5
            y = _CHART_MARGIN_TOP + chart_height - normalized * chart_height
            result.append((x, y))
        return result

    def grid_labels(self) -> list[str]:
        """Axis labels of the horizontal grid lines, top to bottom."""
        low, high = self.value_range
        steps = _CHART_GRID_LINES - 1
        return [f"{high - (i / steps) * (high - low):.1f}" for i in range(_CHART_GRID_LINES)]