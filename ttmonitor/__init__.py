"""Telemetry models, log buffering, colours, history and visualization models for Tenstorrent devices."""

__version__ = "0.1.0"