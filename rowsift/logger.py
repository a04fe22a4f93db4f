"""
Minimal logging context for rowsift.
Single place to control all output: screen (rich) + optional plain log file.
"""
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.text import Text

_PREFIX_STYLES = (
    ("[ERROR]", "red"),
    ("[WARNING]", "yellow"),
    ("[INFO]", "cyan"),
    ("[DEBUG]", "grey50"),
)
_TIMESTAMP_RE = re.compile(r"^\[\d{2}:\d{2}:\d{2}\.\d{3}\] ")


class RowsiftLogger:
    """Print to screen through rich, mirror plain text to a file, always flush"""

    def __init__(self, log_file: Optional[Path] = None, debug: bool = False, quiet: bool = False):
        self.log_file = log_file
        self.debug_mode = debug
        self.quiet = quiet
        self._file_handle = None
        self._console = Console(highlight=False)
        self._start_time = datetime.now()

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._file_handle = open(log_file, "w", buffering=1, encoding="utf-8")

        if self._file_handle:
            from rowsift import __version__

            self.log(f"({self._start_time.strftime('%H:%M:%S')}  Started rowsift {__version__})")

    def _screen_text(self, output: str) -> Text:
        """Build a styled Text without interpreting rich markup in the message."""
        text = Text(output)
        offset = 0
        stamp = _TIMESTAMP_RE.match(output)
        if stamp:
            text.stylize("grey50", 0, stamp.end())
            offset = stamp.end()
        for prefix, style in _PREFIX_STYLES:
            if output.startswith(prefix, offset):
                text.stylize(style, offset, offset + len(prefix))
                break
        return text

    def log(self, msg: str, prefix: str = ""):
        """Log to screen and file"""
        output = f"{prefix}{msg}" if prefix else msg

        if not self.quiet:
            self._console.print(self._screen_text(output))

        if self._file_handle:
            self._file_handle.write(output + "\n")
            self._file_handle.flush()
            os.fsync(self._file_handle.fileno())

    def info(self, msg: str):
        self.log(msg, "[INFO] ")

    def warning(self, msg: str):
        self.log(msg, "[WARNING] ")

    def error(self, msg: str):
        self.log(msg, "[ERROR] ")

    def debug(self, msg: str):
        """Debug message (only shown in debug mode)"""
        if self.debug_mode:
            timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
            self.log(msg, f"[{timestamp}] [DEBUG] ")

    def row_skipped(self, row_id: str, reason: str):
        """Log a leaf row that could not be parsed"""
        label = row_id or "(no id)"
        self.warning(f"Skipped row {label}: {reason}")

    def pass_summary(self, category: str, entries: int, records: int):
        """Log the outcome of one extraction pass (debug mode only)"""
        self.debug(f"Extracted {records} record(s) in {entries} entr{'y' if entries == 1 else 'ies'} ({category})")

    def close(self):
        """Close file handle with goodbye message"""
        if self._file_handle:
            end_time = datetime.now()
            elapsed = end_time - self._start_time
            self.log(f"({end_time.strftime('%H:%M:%S')}  Ended session, elapsed {elapsed.total_seconds():.1f}s)")
            self._file_handle.close()
            self._file_handle = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


# Global instance (set by the CLI)
_logger: Optional[RowsiftLogger] = None


def set_logger(logger: RowsiftLogger):
    """Set global logger instance"""
    global _logger
    _logger = logger


def get_logger() -> RowsiftLogger:
    """Get global logger instance"""
    global _logger
    if _logger is None:
        # Fallback: screen-only logger
        _logger = RowsiftLogger()
    return _logger


# Convenience functions
def log(msg: str):
    get_logger().log(msg)


def info(msg: str):
    get_logger().info(msg)


def warning(msg: str):
    get_logger().warning(msg)


def error(msg: str):
    get_logger().error(msg)


def debug(msg: str):
    get_logger().debug(msg)
