"""
Minimal logging context for Marquee.
Single place to control all output: screen + file, with flush.
"""
import json
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.text import Text

from marquee.__version__ import __version__

_PREFIX_STYLES = (
    ("[WARNING]", "yellow"),
    ("[ERROR]", "red"),
    ("[INFO]", "cyan"),
    ("[DEBUG]", "grey50"),
)
_TIMESTAMP_PREFIX = re.compile(r"^\[\d{2}:\d{2}:\d{2}\.\d{3}\] ")


def next_run_path(output_dir: Path = Path(".")) -> Path:
    """Find next available runN.txt path in output directory."""
    output_dir.mkdir(parents=True, exist_ok=True)

    max_num = 0
    for path in output_dir.glob("run*.txt"):
        try:
            num = int(path.stem[3:])  # Extract number from "runN"
            max_num = max(max_num, num)
        except (ValueError, IndexError):
            pass

    return output_dir / f"run{max_num + 1}.txt"


class MarqueeLogger:
    """Minimal logger: print to screen + file, always flush"""

    def __init__(self, log_file: Optional[Path] = None, debug: bool = False):
        self.log_file = log_file
        self._file_handle = None
        self._start_time = datetime.now()
        self.debug_mode = debug
        self._console = Console(highlight=False)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._file_handle = open(log_file, 'w', buffering=1, encoding='utf-8')  # Line buffered, UTF-8

        welcome = f"({self._start_time.strftime('%H:%M:%S')}  Started Marquee {__version__})"
        self.log(welcome)

    @property
    def console(self) -> Console:
        """Screen console; live displays should render through it"""
        return self._console

    def _screen_text(self, output: str) -> Text:
        """Style known prefixes without interpreting brackets as markup."""
        text = Text(output)
        stamp = _TIMESTAMP_PREFIX.match(output)
        if stamp:
            text.stylize("grey50", 0, stamp.end())
        for marker, style in _PREFIX_STYLES:
            start = output.find(marker)
            if start != -1:
                text.stylize(style, start, start + len(marker))
        return text

    def log(self, msg: str, prefix: str = ""):
        """Log to screen and file"""
        output = f"{prefix}{msg}" if prefix else msg

        self._console.print(self._screen_text(output))

        if self._file_handle:
            self._file_handle.write(output + "\n")
            self._file_handle.flush()
            os.fsync(self._file_handle.fileno())  # Force OS write

    def info(self, msg: str):
        """Info message"""
        self.log(msg)

    def warning(self, msg: str):
        """Warning message"""
        self.log(msg, "[WARNING] ")

    def error(self, msg: str):
        """Error message"""
        self.log(msg, "[ERROR] ")

    def debug(self, msg: str):
        """Debug message (only shown in debug mode)"""
        if self.debug_mode:
            timestamp = datetime.now().strftime('%H:%M:%S.%f')[:-3]
            self.log(msg, f"[{timestamp}] [DEBUG] ")

    def api_request(self, method: str, url: str, params: dict):
        """Log API request (debug mode only)"""
        if self.debug_mode:
            timestamp = datetime.now().strftime('%H:%M:%S.%f')[:-3]
            self.log(f"API Request: {method} {url}", f"[{timestamp}] ")
            if params:
                self.log(f"  Params: {json.dumps(_redact_params(params), indent=2)}", f"[{timestamp}] ")

    def api_response(self, status: int, data: dict, elapsed_ms: float):
        """Log API response (debug mode only)"""
        if self.debug_mode:
            timestamp = datetime.now().strftime('%H:%M:%S.%f')[:-3]
            self.log(f"API Response ({elapsed_ms:.0f}ms): Status {status}", f"[{timestamp}] ")
            if data:
                # Truncate large responses
                data_str = json.dumps(data, indent=2)
                if len(data_str) > 5000:
                    data_str = data_str[:5000] + "\n  ... (truncated)"
                self.log(f"  Data: {data_str}", f"[{timestamp}] ")

    def api_failed(self, service: str, detail: str):
        """Log API failure (debug mode only)"""
        if self.debug_mode:
            timestamp = datetime.now().strftime('%H:%M:%S.%f')[:-3]
            self.log(f"{service} request failed: {detail}", f"[{timestamp}] [ERROR] ")

    def close(self):
        """Close file handle with goodbye message"""
        if self._file_handle:
            end_time = datetime.now()
            elapsed = end_time - self._start_time
            goodbye = f"({end_time.strftime('%H:%M:%S')}  Ended session, elapsed {elapsed.total_seconds():.1f}s)"
            self.log(goodbye)
            self._file_handle.close()
            self._file_handle = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def _redact_params(params: dict) -> dict:
    return {key: ("***" if key == "api_key" else value) for key, value in params.items()}


# Global instance (set by the CLI)
_logger: Optional[MarqueeLogger] = None

def set_logger(logger: MarqueeLogger):
    """Set global logger instance"""
    global _logger
    _logger = logger

def get_logger() -> MarqueeLogger:
    """Get global logger instance"""
    global _logger
    if _logger is None:
        # Fallback: create stdout-only logger
        _logger = MarqueeLogger()
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
