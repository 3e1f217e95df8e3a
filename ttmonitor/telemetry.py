"""Telemetry records read from devices."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

__all__ = ["Telemetry", "SmbusTelemetry"]

_U32_MAX = 0xFFFFFFFF
_U32_PATTERN = re.compile(r"\+?[0-9]+")


def _parse_u32(text: Optional[str]) -> Optional[int]:
    if text is None or not _U32_PATTERN.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U32_MAX else None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _optional_float(data: Mapping[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"field {key!r} must be a number, got {value!r}")
    return float(value)


def _optional_u32(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field {key!r} must be an integer, got {value!r}")
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"field {key!r} out of range: {value}")
    return value


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {value!r}")
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp has no UTC offset: {value!r}")
    return parsed.astimezone(timezone.utc)


@dataclass
class Telemetry:
    """Core metrics of a device; any field may be missing."""

    voltage: Optional[float] = None
    current: Optional[float] = None
    power: Optional[float] = None
    asic_temperature: Optional[float] = None
    aiclk: Optional[int] = None
    heartbeat: Optional[int] = None
    timestamp: datetime = field(default_factory=_utc_now)

    def is_valid(self) -> bool:
        """True if at least power, temperature or current is present."""
        return (
            self.power is not None
            or self.asic_temperature is not None
            or self.current is not None
        )

    def power_w(self) -> float:
        return self.power if self.power is not None else 0.0

    def temp_c(self) -> float:
        return self.asic_temperature if self.asic_temperature is not None else 0.0

    def current_a(self) -> float:
        return self.current if self.current is not None else 0.0

    def aiclk_mhz(self) -> int:
        return self.aiclk if self.aiclk is not None else 0

    def arc_healthy(self) -> bool:
        """True if the firmware heartbeat is positive."""
        return (self.heartbeat or 0) > 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Telemetry:
        """Build from a decoded JSON object; the timestamp defaults to now."""
        timestamp = data.get("timestamp")
        return cls(
            voltage=_optional_float(data, "voltage"),
            current=_optional_float(data, "current"),
            power=_optional_float(data, "power"),
            asic_temperature=_optional_float(data, "asic_temperature"),
            aiclk=_optional_u32(data, "aiclk"),
            heartbeat=_optional_u32(data, "heartbeat"),
            timestamp=_utc_now() if timestamp is None else _parse_timestamp(timestamp),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping with an ISO 8601 timestamp."""
        result = asdict(self)
        result["timestamp"] = self.timestamp.isoformat()
        return result


@dataclass
class SmbusTelemetry:
    """Low-level hardware status fields, all kept as raw strings."""

    board_id: Optional[str] = None
    enum_version: Optional[str] = None
    device_id: Optional[str] = None
    ddr_speed: Optional[str] = None
    ddr_status: Optional[str] = None
    arc0_health: Optional[str] = None
    arc1_health: Optional[str] = None
    arc2_health: Optional[str] = None
    arc3_health: Optional[str] = None
    arc0_fw_version: Optional[str] = None
    arc1_fw_version: Optional[str] = None
    arc2_fw_version: Optional[str] = None
    arc3_fw_version: Optional[str] = None
    eth_fw_version: Optional[str] = None
    m3_bl_fw_version: Optional[str] = None
    m3_app_fw_version: Optional[str] = None
    spibootrom_fw_version: Optional[str] = None
    tt_flash_version: Optional[str] = None
    aiclk: Optional[str] = None
    axiclk: Optional[str] = None
    arcclk: Optional[str] = None
    asic_temperature: Optional[str] = None
    vreg_temperature: Optional[str] = None
    board_temperature: Optional[str] = None
    vcore: Optional[str] = None
    tdp: Optional[str] = None
    tdc: Optional[str] = None
    throttler: Optional[str] = None
    vdd_limits: Optional[str] = None
    thm_limits: Optional[str] = None
    fan_speed: Optional[str] = None
    faults: Optional[str] = None
    pcie_status: Optional[str] = None
    eth_status0: Optional[str] = None
    eth_status1: Optional[str] = None
    input_power: Optional[str] = None
    board_power_limit: Optional[str] = None
    therm_trip_count: Optional[str] = None
    boot_date: Optional[str] = None
    rt_seconds: Optional[str] = None
    wh_fw_date: Optional[str] = None
    asic_tmon0: Optional[str] = None
    asic_tmon1: Optional[str] = None
    mvddq_power: Optional[str] = None
    gddr_train_temp0: Optional[str] = None
    gddr_train_temp1: Optional[str] = None
    aux_status: Optional[str] = None
    eth_debug_status0: Optional[str] = None
    eth_debug_status1: Optional[str] = None

    def ddr_speed_mts(self) -> Optional[int]:
        """DDR speed in MT/s, or None if absent or not a number."""
        return _parse_u32(self.ddr_speed)

    def ddr_status_bitmask(self) -> Optional[int]:
        """DDR training status as a bitmask of two bits per channel."""
        return _parse_u32(self.ddr_status)

    def is_ddr_channel_trained(self, channel: int) -> bool:
        """True if the channel's two status bits read 2 (trained)."""
        if channel < 0:
            raise ValueError(f"channel must be non-negative, got {channel}")
        mask = self.ddr_status_bitmask()
        if mask is None:
            return False
        return (mask >> (channel * 2)) & 0b11 == 2

    def arc0_health_value(self) -> Optional[int]:
        """ARC0 heartbeat counter, or None if absent or not a number."""
        return _parse_u32(self.arc0_health)

    def is_arc0_healthy(self) -> bool:
        return (self.arc0_health_value() or 0) > 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SmbusTelemetry:
        """Build from a decoded JSON object; unknown keys are ignored."""
        values: dict[str, Optional[str]] = {}
        for f in fields(cls):
            value = data.get(f.name)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"field {f.name!r} must be a string, got {value!r}")
            values[f.name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Optional[str]]:
        return asdict(self)