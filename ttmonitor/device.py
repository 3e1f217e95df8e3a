"""Device identity and architecture descriptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

__all__ = ["Architecture", "Device"]


class Architecture(Enum):
    """Silicon generation of a device."""

    GRAYSKULL = "Grayskull"
    WORMHOLE = "Wormhole"
    BLACKHOLE = "Blackhole"
    UNKNOWN = "Unknown"

    def label(self) -> str:
        """Human-readable architecture name."""
        return self.value

    def abbrev(self) -> str:
        """Two-letter abbreviation."""
        return _ABBREVIATIONS[self]

    def memory_channels(self) -> int:
        """Number of DDR memory channels."""
        return _MEMORY_CHANNELS[self]

    def tensix_grid(self) -> tuple[int, int]:
        """Tensix core grid as (rows, cols)."""
        return _TENSIX_GRIDS[self]

    @classmethod
    def from_board_type(cls, board_type: str) -> Architecture:
        """Detect the architecture from a board type string such as "n150"."""
        lowered = board_type.lower()
        for arch, patterns in _BOARD_PATTERNS:
            if any(pattern in lowered for pattern in patterns):
                return arch
        return cls.UNKNOWN


_ABBREVIATIONS = {
    Architecture.GRAYSKULL: "GS",
    Architecture.WORMHOLE: "WH",
    Architecture.BLACKHOLE: "BH",
    Architecture.UNKNOWN: "UK",
}

_MEMORY_CHANNELS = {
    Architecture.GRAYSKULL: 4,
    Architecture.WORMHOLE: 8,
    Architecture.BLACKHOLE: 12,
    Architecture.UNKNOWN: 0,
}

_TENSIX_GRIDS = {
    Architecture.GRAYSKULL: (10, 12),
    Architecture.WORMHOLE: (8, 10),
    Architecture.BLACKHOLE: (14, 16),
    Architecture.UNKNOWN: (0, 0),
}

_BOARD_PATTERNS = (
    (Architecture.GRAYSKULL, ("e75", "e150")),
    (Architecture.WORMHOLE, ("n150", "n300")),
    (Architecture.BLACKHOLE, ("p150", "p300")),
)


@dataclass
class Device:
    """A single device; the architecture is derived from the board type."""

    index: int
    board_type: str
    bus_id: str
    coords: str
    architecture: Architecture = field(init=False)

    def __post_init__(self) -> None:
        self.architecture = Architecture.from_board_type(self.board_type)

    def name(self) -> str:
        """Name such as "Wormhole-0"."""
        return f"{self.architecture.label()}-{self.index}"

    def is_grayskull(self) -> bool:
        return self.architecture is Architecture.GRAYSKULL

    def is_wormhole(self) -> bool:
        return self.architecture is Architecture.WORMHOLE

    def is_blackhole(self) -> bool:
        return self.architecture is Architecture.BLACKHOLE

    def memory_channels(self) -> int:
        return self.architecture.memory_channels()

    def tensix_grid(self) -> tuple[int, int]:
        return self.architecture.tensix_grid()