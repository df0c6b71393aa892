"""Curses terminal UI for Debug Dash."""
