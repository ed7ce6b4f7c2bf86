# logger_utils.py - logging messages and timing metrics for the notes assistant

import os
import time
from datetime import datetime
from typing import Optional

# Default log file, can be overridden with Log.configure()
DEFAULT_LOG_PATH = os.path.join("logs", "predictive_notes.log")


class Log:
    """Lightweight logger for writing messages and tracking metrics.

    Every entry is appended to the log file as:
        [YYYY-MM-DD HH:MM:SS] LEVEL   | message
    Console echo is off by default so the TUI screen stays clean.
    """
    COLORS = {
        "DEBUG": "\033[90m",   # gray
        "INFO": "\033[94m",    # blue
        "WARNING": "\033[93m", # yellow
        "ERROR": "\033[91m",   # red
        "RESET": "\033[0m",
    }

    path: str = DEFAULT_LOG_PATH
    echo: bool = False
    use_color: bool = True

    @classmethod
    def configure(cls, path: Optional[str] = None, echo: Optional[bool] = None,
                  use_color: Optional[bool] = None) -> None:
        if path is not None:
            cls.path = path
        if echo is not None:
            cls.echo = echo
        if use_color is not None:
            cls.use_color = use_color

    @classmethod
    def write(cls, msg: str, level: str = "INFO") -> None:
        """Append a log message to the log file with a timestamp."""
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{ts}] {level:<7} | {msg}"

        folder = os.path.dirname(cls.path)
        try:
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(cls.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError:
            # an unwritable log never stops the editor
            pass

        if not cls.echo:
            return
        if cls.use_color and level in cls.COLORS:
            print(f"{cls.COLORS[level]}{line}{cls.COLORS['RESET']}")
        else:
            print(line)

    # Public logging methods
    @classmethod
    def debug(cls, msg: str) -> None:
        cls.write(msg, "DEBUG")

    @classmethod
    def info(cls, msg: str) -> None:
        cls.write(msg, "INFO")

    @classmethod
    def warning(cls, msg: str) -> None:
        cls.write(msg, "WARNING")

    @classmethod
    def error(cls, msg: str) -> None:
        cls.write(msg, "ERROR")

    @classmethod
    def metric(cls, tag: str, value, unit: str = "") -> None:
        """
        Record a metric (timing, counts, etc).
        Example: [..] METRIC  | model build done: 0.004s
        """
        cls.write(f"{tag}: {value}{unit}", "METRIC")

    @staticmethod
    def time_block(label: str) -> "_Timer":
        """
        Helper for measuring execution time of a code block.
        To use:
            with Log.time_block("model build"):
                build(tokens)
        """
        return _Timer(label)


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, label: str):
        self.label = label
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        Log.metric(f"{self.label} done", round(self.elapsed, 4), "s")
        return False
