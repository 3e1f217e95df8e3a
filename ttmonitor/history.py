"""Rolling telemetry history per device, used for charts and animations."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional

from ttmonitor.telemetry import Telemetry

__all__ = ["MAX_HISTORY_SAMPLES", "TelemetryHistory", "HistoryManager"]

MAX_HISTORY_SAMPLES = 300  # 30 seconds at a 100 ms interval

# Largest finite single-precision value; an empty range is (max, -max).
_F32_MAX = 3.4028234663852886e38


def _samples() -> Deque:
    return deque(maxlen=MAX_HISTORY_SAMPLES)


def _value_range(values: Deque[float]) -> tuple[float, float]:
    if not values:
        return (_F32_MAX, -_F32_MAX)
    return (min(values), max(values))


@dataclass
class TelemetryHistory:
    """Bounded series of samples for one device, oldest first."""

    device_idx: int
    power: Deque[float] = field(default_factory=_samples)
    temperature: Deque[float] = field(default_factory=_samples)
    current: Deque[float] = field(default_factory=_samples)
    voltage: Deque[float] = field(default_factory=_samples)
    aiclk: Deque[int] = field(default_factory=_samples)
    timestamps: Deque[float] = field(default_factory=_samples)

    def push(self, telem: Telemetry, timestamp: float) -> None:
        """Append a sample; the oldest is dropped once the limit is reached."""
        self.power.append(telem.power_w())
        self.temperature.append(telem.temp_c())
        self.current.append(telem.current_a())
        self.voltage.append(telem.voltage if telem.voltage is not None else 0.0)
        self.aiclk.append(telem.aiclk_mhz())
        self.timestamps.append(timestamp)

    def latest_power(self) -> float:
        return self.power[-1] if self.power else 0.0

    def latest_temp(self) -> float:
        return self.temperature[-1] if self.temperature else 0.0

    def latest_current(self) -> float:
        return self.current[-1] if self.current else 0.0

    def power_range(self) -> tuple[float, float]:
        """(min, max) of the power series."""
        return _value_range(self.power)

    def temp_range(self) -> tuple[float, float]:
        """(min, max) of the temperature series."""
        return _value_range(self.temperature)

    def __len__(self) -> int:
        return len(self.power)

    def clear(self) -> None:
        for series in (
            self.power,
            self.temperature,
            self.current,
            self.voltage,
            self.aiclk,
            self.timestamps,
        ):
            series.clear()


class HistoryManager:
    """Histories for every device, with timestamps relative to a start time."""

    def __init__(self) -> None:
        self._histories: list[TelemetryHistory] = []
        self._start = time.monotonic()

    def ensure_capacity(self, device_count: int) -> None:
        """Make sure histories exist for devices 0..device_count-1."""
        while len(self._histories) < device_count:
            self._histories.append(TelemetryHistory(len(self._histories)))

    def push(self, device_idx: int, telem: Telemetry) -> None:
        """Record a sample for a device, creating its history if needed."""
        if device_idx < 0:
            raise ValueError(f"device index must be non-negative, got {device_idx}")
        self.ensure_capacity(device_idx + 1)
        self._histories[device_idx].push(telem, time.monotonic() - self._start)

    def get(self, device_idx: int) -> Optional[TelemetryHistory]:
        """History of a device, or None if it has none."""
        if 0 <= device_idx < len(self._histories):
            return self._histories[device_idx]
        return None

    def clear(self) -> None:
        """Empty every history and restart the clock."""
        for history in self._histories:
            history.clear()
        self._start = time.monotonic()