"""Debug Dash - live terminal viewer for structured debug events."""

__version__ = "0.3.0"
