import pytest

from ttmonitor.colors import Rgba
from ttmonitor.terminal_grid import TerminalCanvas, TerminalCell, TerminalGrid

WHITE = Rgba.from_rgb(1.0, 1.0, 1.0)
RED = Rgba.from_rgb(1.0, 0.0, 0.0)


def test_grid_creation():
    grid = TerminalGrid(80, 24)
    assert grid.width == 80
    assert grid.height == 24


def test_set_and_get():
    grid = TerminalGrid(10, 10)
    grid.set_char(5, 5, "X", RED)
    cell = grid.get(5, 5)
    assert cell.character == "X"
    assert cell.fg_color == RED
    assert cell.bg_color is None


def test_get_out_of_bounds():
    grid = TerminalGrid(10, 10)
    assert grid.get(10, 0) is None
    assert grid.get(0, 10) is None
    assert grid.get(-1, 0) is None


def test_set_out_of_bounds_ignored():
    grid = TerminalGrid(3, 3)
    grid.set_char(5, 5, "X", RED)
    assert all(cell.character == " " for _, _, cell in grid.iter_cells())


def test_write_str():
    grid = TerminalGrid(20, 5)
    grid.write_str(2, 5, "Hello", WHITE)
    assert "".join(grid.get(2, c).character for c in range(5, 10)) == "Hello"


def test_write_str_truncates():
    grid = TerminalGrid(5, 1)
    grid.write_str(0, 3, "abcd", WHITE)
    assert grid.get(0, 3).character == "a"
    assert grid.get(0, 4).character == "b"
    assert grid.get(0, 2).character == " "


def test_write_centered():
    grid = TerminalGrid(20, 5)
    grid.write_centered(2, "Test", WHITE)
    assert grid.get(2, 8).character == "T"
    assert grid.get(2, 9).character == "e"
    assert grid.get(2, 10).character == "s"
    assert grid.get(2, 11).character == "t"


def test_write_centered_too_wide_starts_at_zero():
    grid = TerminalGrid(3, 1)
    grid.write_centered(0, "abcdef", WHITE)
    assert [grid.get(0, c).character for c in range(3)] == ["a", "b", "c"]


def test_draw_box():
    grid = TerminalGrid(20, 10)
    grid.draw_box(2, 3, 10, 5, WHITE)
    assert grid.get(2, 3).character == "┌"
    assert grid.get(2, 12).character == "┐"
    assert grid.get(6, 3).character == "└"
    assert grid.get(6, 12).character == "┘"
    assert grid.get(2, 4).character == "─"
    assert grid.get(3, 3).character == "│"


def test_draw_box_too_small():
    grid = TerminalGrid(5, 5)
    grid.draw_box(0, 0, 1, 3, WHITE)
    assert grid.get(0, 0).character == " "


def test_hline_clipped_to_width():
    grid = TerminalGrid(5, 1)
    grid.draw_hline(0, 2, 100, WHITE)
    assert [grid.get(0, c).character for c in range(5)] == [" ", " ", "─", "─", "─"]


def test_clear_and_clear_with():
    grid = TerminalGrid(4, 2)
    grid.clear_with("#", RED)
    assert all(cell.character == "#" and cell.fg_color == RED for _, _, cell in grid.iter_cells())
    grid.clear()
    assert all(cell == TerminalCell() for _, _, cell in grid.iter_cells())


def test_set_char_with_bg():
    grid = TerminalGrid(2, 2)
    grid.set_char_with_bg(1, 1, "B", WHITE, RED)
    assert grid.get(1, 1) == TerminalCell.with_bg("B", WHITE, RED)


def test_iter_cells_order():
    grid = TerminalGrid(3, 2)
    positions = [(r, c) for r, c, _ in grid.iter_cells()]
    assert positions == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        TerminalGrid(-1, 5)


def test_canvas_pixel_size():
    canvas = TerminalCanvas(TerminalGrid(80, 24), 10.0, 20.0)
    assert canvas.pixel_width() == 800.0
    assert canvas.pixel_height() == 480.0
    canvas.set_grid(TerminalGrid(40, 12))
    assert canvas.pixel_width() == 400.0


def test_canvas_layout():
    grid = TerminalGrid(4, 2)
    grid.set_char(1, 2, "Z", RED)
    grid.set_char_with_bg(0, 0, " ", WHITE, RED)
    layout = TerminalCanvas(grid, 10.0, 20.0).layout(40.0, 40.0)
    assert layout.cell_size == 10.0
    assert layout.font_size == pytest.approx(8.5)
    assert layout.fills == [(0.0, 0.0, RED)]
    assert len(layout.glyphs) == 1
    char, x, y, color = layout.glyphs[0]
    assert char == "Z"
    assert x == pytest.approx(21.0)
    assert y == pytest.approx(11.0)
    assert color == RED