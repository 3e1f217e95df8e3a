# ttmonitor

Building blocks for a real-time hardware monitor for Tenstorrent accelerator
cards. The package needs only the standard library. It contains these modules:

- `ttmonitor.device` holds the `Architecture` enum (`GRAYSKULL`, `WORMHOLE`,
  `BLACKHOLE`, `UNKNOWN`). `Architecture.from_board_type()` detects the
  architecture from board type strings such as `e75`, `n150` or `p300`. Each
  architecture reports its label, abbreviation, DDR channel count and Tensix
  grid. The module also holds the `Device` record, whose architecture is
  derived from its board type.
- `ttmonitor.telemetry` holds `Telemetry` (voltage, current, power, ASIC
  temperature, AICLK, heartbeat, timestamp) and `SmbusTelemetry`, whose
  low-level status fields are all raw strings. `SmbusTelemetry` has helpers
  for the DDR speed, the DDR training bitmask, per-channel training state and
  ARC0 health. Both classes convert with `from_dict()` and `to_dict()`.
- `ttmonitor.logbuffer` installs a handler on the root logger. The handler
  echoes records to stderr and keeps the 100 most recent messages in memory
  as `LogMessage` records. The stderr echo can be switched off with
  `disable_stderr()` and back on with `enable_stderr()`.
- `ttmonitor.colors` holds a palette of terminal colours and the
  `temp_color()`, `power_color()`, `health_color()` and `temp_to_hue()`
  mappings. The colour mappings return `Rgb` values when `COLORTERM` is
  `truecolor` or `24bit`, and `Indexed` 256-colour entries otherwise. `Rgba`
  is a floating-point colour used by the drawing models.
- `ttmonitor.history` holds `TelemetryHistory`, which keeps at most 300
  samples for one device, and `HistoryManager`, which keeps one history per
  device with timestamps relative to its start time.
- `ttmonitor.terminal_grid` holds `TerminalGrid`, a grid of coloured
  character cells with text, centring, line and box drawing. Writes outside
  the grid are ignored. `TerminalCanvas.layout()` plans how the grid fits
  into a pixel area, with square cells.
- `ttmonitor.starfield` holds `StarfieldVisualization`, which has one star
  per Tensix core. Star brightness and hue follow the latest sample of a
  `TelemetryHistory`. The module also holds `LineChart`, which computes plot
  points and axis labels, and `hsv_to_rgb()`.
- `ttmonitor.dashboard` holds `DashboardVisualization`. It produces DDR
  channel states, memory-hierarchy layers, gauges and border colours for the
  current frame. These values are an animation driven by the frame counter
  alone. `update()` advances the frame and does not read the history it is
  given.

## Installation

```
pip install .
```

## Example

```python
from ttmonitor.device import Device
from ttmonitor.telemetry import Telemetry
from ttmonitor.history import HistoryManager
from ttmonitor.colors import temp_color

device = Device(0, "n150", "0000:01:00.0", "(0,0)")
print(device.name())              # Wormhole-0
print(device.memory_channels())   # 8

telem = Telemetry(power=45.2, asic_temperature=52.3, current=25.5, aiclk=1000, heartbeat=1)
history = HistoryManager()
history.push(device.index, telem)
print(history.get(0).latest_power())   # 45.2
print(temp_color(telem.temp_c()))
```

### Log buffering

```python
import logging
from ttmonitor.logbuffer import init_logging_with_buffer, get_recent_log_messages, disable_stderr

init_logging_with_buffer(logging.INFO)
disable_stderr()
logging.getLogger(__name__).info("monitor started")
for msg in get_recent_log_messages(5):
    print(msg.timestamp, msg.level, msg.message)
```

## What it does not do

This is a library of models and helpers. It has no command to run, and it
draws no terminal or graphical screen. The visualization classes only compute
what would be drawn. The package has no code that reads telemetry from a
device or from another tool. Telemetry has to be supplied by the caller,
either as objects or as dictionaries passed to `from_dict()`.

## Running the tests

```
pip install .[test]
pytest
```