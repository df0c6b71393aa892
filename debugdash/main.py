"""
Debug Dash - Entry Point

Live terminal viewer for structured debug events. An instrumented
program connects to the local TCP port, writes one JSON event followed
by a NUL byte, and the event appears at the top of the Entries list.

Usage:
  debugdash            # listen on 127.0.0.1:9337
  debugdash 9400       # listen on 127.0.0.1:9400
  python -m debugdash.main [PORT]
"""

import argparse
import locale
import logging
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

from . import __version__
from .listener import EventListener
from .tui.app import run_dashboard
from .utils.config import DEFAULT_PORT, DashConfig
from .utils.event_store import EventStore
from .utils.log_buffer import RecentLogBuffer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def _port_number(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port number: {value!r}") from None
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="debugdash",
        description="Live terminal dashboard for structured debug events.",
    )
    parser.add_argument(
        "port", nargs="?", type=_port_number, default=DEFAULT_PORT,
        help=f"TCP port to listen on (default {DEFAULT_PORT})",
    )
    return parser.parse_args(argv)


def configure_logging(config: DashConfig) -> RecentLogBuffer:
    """Route all logging into an in-memory buffer for the status bar."""
    buffer = RecentLogBuffer(capacity=int(config.get("log_buffer_size", 200)))
    buffer.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(buffer)
    root.setLevel(config.get("log_level", "INFO"))
    return buffer


def _get_error_log_path() -> Path:
    """Get the path to the error log file."""
    try:
        log_dir = Path.home() / ".cache" / "debugdash" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir / "debugdash_errors.log"
    except OSError:
        return Path(tempfile.gettempdir()) / "debugdash_errors.log"


def _write_error_log(config: DashConfig,
                     log_buffer: Optional[RecentLogBuffer]) -> Path:
    """Append the traceback, settings and recent log lines to the error log."""
    import datetime
    import json
    import traceback

    error_log = _get_error_log_path()
    try:
        with open(error_log, "a") as f:
            f.write(f"\n{'=' * 60}\n")
            f.write(f"[{datetime.datetime.now().isoformat()}] "
                    f"FATAL ERROR (debugdash {__version__})\n")
            f.write(traceback.format_exc())
            f.write(f"config: {json.dumps(config.to_dict(), sort_keys=True)}\n")
            if log_buffer is not None:
                f.write("-- recent log --\n")
                for line in log_buffer.lines()[-20:]:
                    f.write(line + "\n")
            f.write(f"{'=' * 60}\n")
    except OSError:
        pass
    return error_log


def main(argv: Optional[List[str]] = None) -> None:
    """Standalone entry point."""
    args = _parse_args(argv)
    config = DashConfig({"port": args.port})
    log_buffer = configure_logging(config)

    store = EventStore()
    listener = EventListener(
        store,
        host=config.get("host"),
        port=config.get("port"),
        max_frame_bytes=config.get("max_frame_bytes"),
    )
    if not listener.start():
        reason = log_buffer.latest(logging.ERROR) or "bind failed"
        print(f"ERROR: Cannot listen on {config.address}: {reason}",
              file=sys.stderr)
        sys.exit(1)

    exit_code = 0
    # curses needs the locale for box-drawing and non-ASCII labels
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as e:
        logger.warning("Could not apply system locale: %s", e)

    try:
        run_dashboard(store, listener, config, log_buffer)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.exception("Dashboard terminated")
        error_log = _write_error_log(config, log_buffer)
        print("\nDebug Dash encountered a fatal error:\n", file=sys.stderr)
        print(f"  {type(e).__name__}: {e}\n", file=sys.stderr)
        print(f"Full error details saved to:\n  {error_log}\n", file=sys.stderr)
        exit_code = 1
    finally:
        listener.stop()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
