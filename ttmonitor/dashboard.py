"""Dashboard view of a device: DDR channels, memory hierarchy and metric gauges."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ttmonitor.colors import Rgba
from ttmonitor.device import Device
from ttmonitor.history import TelemetryHistory
from ttmonitor.starfield import hsv_to_rgb

__all__ = ["ChannelStatus", "MemoryLayer", "Gauge", "DashboardVisualization"]

_FRAMES_PER_STATE = 20

# (symbol, status text, colour) for the cycling training states.
_CHANNEL_STATES = (
    ("○", "Idle", Rgba.from_rgb(0.4, 0.4, 0.5)),
    ("◐", "Training", Rgba.from_rgb(0.3, 0.8, 0.9)),
    ("●", "Trained", Rgba.from_rgb(0.3, 0.9, 0.5)),
)

_BAR_HIGH = Rgba.from_rgb(1.0, 0.4, 0.4)
_BAR_MEDIUM = Rgba.from_rgb(1.0, 0.7, 0.3)
_BAR_LOW = Rgba.from_rgb(0.3, 0.9, 0.6)


def _bar_color(utilization: float) -> Rgba:
    if utilization > 0.7:
        return _BAR_HIGH
    if utilization > 0.4:
        return _BAR_MEDIUM
    return _BAR_LOW


@dataclass(frozen=True)
class ChannelStatus:
    """Display state of one DDR channel."""

    index: int
    symbol: str
    status: str
    color: Rgba
    utilization: float
    bar_color: Rgba

    @property
    def label(self) -> str:
        """Channel label such as "CH0"."""
        return f"CH{self.index}"

    def utilization_text(self) -> str:
        return f"{self.utilization * 100.0:.0f}%"


@dataclass(frozen=True)
class MemoryLayer:
    """One level of the memory hierarchy with its current activity."""

    name: str
    color: Rgba
    activity: float
    speed_label: str

    def fill_fraction(self) -> float:
        """Share of the bar to fill, clamped to 0.0-1.0."""
        return max(0.0, min(self.activity, 1.0))

    def activity_text(self) -> str:
        return f"{self.activity * 100.0:.0f}%"


@dataclass(frozen=True)
class Gauge:
    """A labelled value shown against a maximum."""

    label: str
    value: float
    max_value: float
    unit: str
    color: Rgba

    def fill_fraction(self) -> float:
        """Share of the bar to fill, capped at 1.0."""
        return min(self.value / self.max_value, 1.0)

    def value_text(self) -> str:
        return f"{self.value:.1f} {self.unit}"


class DashboardVisualization:
    """Animated overview of a device, advanced one frame per update."""

    def __init__(self, device: Device) -> None:
        self.device = device
        self.frame = 0

    def update(self, history: Optional[TelemetryHistory]) -> None:
        """Advance one animation frame."""
        self.frame += 1

    def title(self) -> str:
        """Header line naming the board and its architecture."""
        return f"⚡ {self.device.board_type} - {self.device.architecture.label()}"

    def details(self) -> str:
        """Header line describing the grid, DDR channels and core count."""
        rows, cols = self.device.tensix_grid()
        return (
            f"{cols}×{rows} Tensix Grid │ {self.device.memory_channels()} DDR Channels"
            f" │ {rows * cols} Cores"
        )

    def ddr_channels(self) -> list[ChannelStatus]:
        """State of every DDR channel of the device for the current frame."""
        frame = self.frame
        channels = []
        for i in range(self.device.memory_channels()):
            symbol, status, color = _CHANNEL_STATES[(frame // _FRAMES_PER_STATE + i) % 3]
            utilization = (math.sin(frame * 0.05 + i * 0.5) * 0.5 + 0.5) * 0.8
            channels.append(
                ChannelStatus(i, symbol, status, color, utilization, _bar_color(utilization))
            )
        return channels

    def memory_layers(self) -> list[MemoryLayer]:
        """L1, L2 and DDR layers, fastest first."""
        frame = self.frame
        return [
            MemoryLayer(
                "L1 SRAM (Per-Core)",
                Rgba.from_rgb(0.3, 0.8, 1.0),
                0.6 + math.sin(frame * 0.1) * 0.2,
                "Fast",
            ),
            MemoryLayer(
                "L2 Cache (8 Banks)",
                Rgba.from_rgb(1.0, 0.8, 0.3),
                0.5 + math.sin(frame * 0.08 + 1.0) * 0.2,
                "Shared",
            ),
            MemoryLayer(
                "DDR (Off-Chip)",
                Rgba.from_rgb(0.9, 0.4, 0.9),
                0.4 + math.sin(frame * 0.06 + 2.0) * 0.15,
                "Large",
            ),
        ]

    def gauges(self) -> list[Gauge]:
        """Power, temperature and current gauges for the current frame."""
        frame = self.frame
        return [
            Gauge(
                "⚡ Power",
                50.0 + math.sin(frame * 0.05) * 30.0,
                200.0,
                "W",
                Rgba.from_rgb(0.3, 0.9, 0.6),
            ),
            Gauge(
                "🌡 Temp",
                55.0 + math.sin(frame * 0.04 + 1.0) * 15.0,
                100.0,
                "°C",
                Rgba.from_rgb(1.0, 0.6, 0.3),
            ),
            Gauge(
                "⚙ Current",
                30.0 + math.sin(frame * 0.06 + 2.0) * 15.0,
                100.0,
                "A",
                Rgba.from_rgb(0.5, 0.7, 1.0),
            ),
        ]

    def border_colors(self) -> tuple[Rgba, Rgba]:
        """Colours of the top and bottom border, on opposite hues."""
        phase = math.fmod(self.frame * 0.02, 1.0)
        hue = phase * 360.0
        return (
            hsv_to_rgb(hue, 0.6, 0.8),
            hsv_to_rgb(math.fmod(hue + 180.0, 360.0), 0.6, 0.8),
        )