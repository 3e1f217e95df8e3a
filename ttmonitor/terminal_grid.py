"""Character grid with colours, and its layout as a pixel canvas."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ttmonitor.colors import Rgba

__all__ = ["TerminalCell", "TerminalGrid", "TerminalCanvas"]

_DEFAULT_FG = Rgba.from_rgb(0.8, 0.8, 0.8)
_CANVAS_BACKGROUND = Rgba.from_rgb(0.05, 0.05, 0.08)


@dataclass
class TerminalCell:
    """One character with its foreground and optional background colour."""

    character: str = " "
    fg_color: Rgba = _DEFAULT_FG
    bg_color: Optional[Rgba] = None

    @classmethod
    def with_bg(cls, character: str, fg_color: Rgba, bg_color: Rgba) -> TerminalCell:
        return cls(character, fg_color, bg_color)


class TerminalGrid:
    """Fixed-size grid of cells addressed by (row, col); writes outside are ignored."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"grid size must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        self._cells = [[TerminalCell() for _ in range(width)] for _ in range(height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._height and 0 <= col < self._width

    def get(self, row: int, col: int) -> Optional[TerminalCell]:
        """Cell at a position, or None if outside the grid."""
        return self._cells[row][col] if self._in_bounds(row, col) else None

    def set(self, row: int, col: int, cell: TerminalCell) -> None:
        if self._in_bounds(row, col):
            self._cells[row][col] = cell

    def set_char(self, row: int, col: int, character: str, fg_color: Rgba) -> None:
        self.set(row, col, TerminalCell(character, fg_color))

    def set_char_with_bg(
        self, row: int, col: int, character: str, fg_color: Rgba, bg_color: Rgba
    ) -> None:
        self.set(row, col, TerminalCell.with_bg(character, fg_color, bg_color))

    def clear(self) -> None:
        """Reset every cell to a default blank."""
        self._cells = [[TerminalCell() for _ in range(self._width)] for _ in range(self._height)]

    def clear_with(self, character: str, color: Rgba) -> None:
        """Fill every cell with one character and colour."""
        self._cells = [
            [TerminalCell(character, color) for _ in range(self._width)]
            for _ in range(self._height)
        ]

    def write_str(self, row: int, col: int, text: str, color: Rgba) -> None:
        """Write text from a position, stopping at the right edge."""
        for offset, ch in enumerate(text):
            if col + offset >= self._width:
                break
            self.set_char(row, col + offset, ch, color)

    def write_centered(self, row: int, text: str, color: Rgba) -> None:
        """Write text centred on a row; text too wide starts at column 0."""
        if len(text) >= self._width:
            self.write_str(row, 0, text, color)
        else:
            self.write_str(row, (self._width - len(text)) // 2, text, color)

    def draw_hline(self, row: int, start_col: int, end_col: int, color: Rgba) -> None:
        """Horizontal line from start_col to end_col inclusive."""
        for col in range(start_col, min(end_col, self._width - 1) + 1):
            self.set_char(row, col, "─", color)

    def draw_vline(self, col: int, start_row: int, end_row: int, color: Rgba) -> None:
        """Vertical line from start_row to end_row inclusive."""
        for row in range(start_row, min(end_row, self._height - 1) + 1):
            self.set_char(row, col, "│", color)

    def draw_box(self, row: int, col: int, width: int, height: int, color: Rgba) -> None:
        """Box outline; boxes smaller than 2x2 are not drawn."""
        if width < 2 or height < 2:
            return
        right = col + width - 1
        bottom = row + height - 1
        self.set_char(row, col, "┌", color)
        self.set_char(row, right, "┐", color)
        self.set_char(bottom, col, "└", color)
        self.set_char(bottom, right, "┘", color)
        self.draw_hline(row, col + 1, right - 1, color)
        self.draw_hline(bottom, col + 1, right - 1, color)
        self.draw_vline(col, row + 1, bottom - 1, color)
        self.draw_vline(right, row + 1, bottom - 1, color)

    def iter_cells(self) -> Iterator[tuple[int, int, TerminalCell]]:
        """Yield (row, col, cell) in row-major order."""
        for row, cells in enumerate(self._cells):
            for col, cell in enumerate(cells):
                yield row, col, cell


@dataclass(frozen=True)
class _CanvasLayout:
    """Drawing plan for a grid: background, cell fills and glyphs."""

    background: Rgba
    cell_size: float
    font_size: float
    fills: list[tuple[float, float, Rgba]] = field(default_factory=list)
    glyphs: list[tuple[str, float, float, Rgba]] = field(default_factory=list)


class TerminalCanvas:
    """Maps a grid onto pixels with square cells that fit the bounds."""

    def __init__(self, grid: TerminalGrid, cell_width: float, cell_height: float) -> None:
        self.grid = grid
        self.cell_width = cell_width
        self.cell_height = cell_height

    def set_grid(self, grid: TerminalGrid) -> None:
        self.grid = grid

    def pixel_width(self) -> float:
        return self.grid.width * self.cell_width

    def pixel_height(self) -> float:
        return self.grid.height * self.cell_height

    def layout(self, width: float, height: float) -> _CanvasLayout:
        """Plan the drawing into a width x height area; blank glyphs are skipped."""
        cell_w = width / self.grid.width if self.grid.width else math.inf
        cell_h = height / self.grid.height if self.grid.height else math.inf
        cell_size = min(cell_w, cell_h)
        result = _CanvasLayout(_CANVAS_BACKGROUND, cell_size, cell_size * 0.85)
        for row, col, cell in self.grid.iter_cells():
            x = col * cell_size
            y = row * cell_size
            if cell.bg_color is not None:
                result.fills.append((x, y, cell.bg_color))
            if cell.character != " ":
                pad = cell_size * 0.1
                result.glyphs.append((cell.character, x + pad, y + pad, cell.fg_color))
        return result