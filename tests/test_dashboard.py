import pytest

from ttmonitor.colors import Rgba
from ttmonitor.dashboard import DashboardVisualization, Gauge, MemoryLayer
from ttmonitor.device import Device
from ttmonitor.starfield import hsv_to_rgb


def _dashboard(board: str = "n150") -> DashboardVisualization:
    return DashboardVisualization(Device(0, board, "0000:00:00.0", "(0,0)"))


def _advance(dash: DashboardVisualization, frames: int) -> None:
    for _ in range(frames):
        dash.update(None)


@pytest.mark.parametrize("board, count", [("e150", 4), ("n300", 8), ("p150", 12), ("x1", 0)])
def test_channel_count_follows_architecture(board, count):
    channels = _dashboard(board).ddr_channels()
    assert len(channels) == count
    assert [c.index for c in channels] == list(range(count))


def test_channel_labels_and_initial_states():
    channels = _dashboard().ddr_channels()
    assert channels[0].label == "CH0"
    assert [c.status for c in channels[:3]] == ["Idle", "Training", "Trained"]
    assert channels[3].status == "Idle"


def test_update_counts_frames_with_or_without_history():
    dash = _dashboard()
    _advance(dash, 5)
    assert dash.frame == 5


def test_utilization_bounds_and_bar_colour():
    dash = _dashboard("p300")
    for _ in range(60):
        for channel in dash.ddr_channels():
            assert 0.0 <= channel.utilization <= 0.8
            if channel.utilization > 0.7:
                assert channel.bar_color == Rgba.from_rgb(1.0, 0.4, 0.4)
            elif channel.utilization > 0.4:
                assert channel.bar_color == Rgba.from_rgb(1.0, 0.7, 0.3)
            else:
                assert channel.bar_color == Rgba.from_rgb(0.3, 0.9, 0.6)
        dash.update(None)


def test_first_channel_at_frame_zero_is_low():
    channel = _dashboard().ddr_channels()[0]
    assert channel.utilization == pytest.approx(0.4)
    assert channel.utilization_text() == "40%"


def test_memory_layers_order_and_ranges():
    dash = _dashboard()
    for _ in range(100):
        layers = dash.memory_layers()
        assert [layer.speed_label for layer in layers] == ["Fast", "Shared", "Large"]
        assert layers[0].name == "L1 SRAM (Per-Core)"
        assert layers[2].name == "DDR (Off-Chip)"
        for layer in layers:
            assert 0.0 <= layer.fill_fraction() <= 1.0
        dash.update(None)


def test_memory_layer_fill_is_clamped():
    color = Rgba.from_rgb(0.1, 0.2, 0.3)
    assert MemoryLayer("a", color, 1.5, "x").fill_fraction() == 1.0
    assert MemoryLayer("a", color, -0.2, "x").fill_fraction() == 0.0


def test_gauges_units_and_ranges():
    dash = _dashboard()
    for _ in range(200):
        power, temp, current = dash.gauges()
        assert (power.unit, temp.unit, current.unit) == ("W", "°C", "A")
        assert 20.0 <= power.value <= 80.0
        assert 40.0 <= temp.value <= 70.0
        assert 15.0 <= current.value <= 45.0
        assert power.max_value == 200.0
        dash.update(None)


def test_gauge_fill_and_text():
    color = Rgba.from_rgb(1.0, 1.0, 1.0)
    assert Gauge("g", 300.0, 200.0, "W", color).fill_fraction() == 1.0
    assert Gauge("g", 50.0, 200.0, "W", color).fill_fraction() == pytest.approx(0.25)
    assert Gauge("g", 12.34, 100.0, "A", color).value_text() == "12.3 A"


def test_power_gauge_at_frame_zero():
    power = _dashboard().gauges()[0]
    assert power.value == pytest.approx(50.0)
    assert power.label == "⚡ Power"


def test_border_colours_are_opposite_hues():
    dash = _dashboard()
    top, bottom = dash.border_colors()
    assert top == hsv_to_rgb(0.0, 0.6, 0.8)
    assert bottom == hsv_to_rgb(180.0, 0.6, 0.8)


def test_border_colours_repeat_after_full_cycle():
    dash = _dashboard()
    _advance(dash, 10)
    first = dash.border_colors()
    _advance(dash, 50)
    second = dash.border_colors()
    for a, b in zip(first, second):
        assert a.r == pytest.approx(b.r, abs=1e-6)
        assert a.g == pytest.approx(b.g, abs=1e-6)
        assert a.b == pytest.approx(b.b, abs=1e-6)


def test_header_text():
    dash = _dashboard("n150")
    assert dash.title() == "⚡ n150 - Wormhole"
    assert dash.details() == "10×8 Tensix Grid │ 8 DDR Channels │ 80 Cores"