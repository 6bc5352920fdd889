"""Output formatting services."""

from .formatter import format_clock_time, format_duration, route_to_csv, route_to_json

__all__ = ["format_duration", "format_clock_time", "route_to_json", "route_to_csv"]
