"""logging utilities with rich support

all output goes to stderr: stdout is reserved for the stdio channel of the
MCP host.
"""

import os
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.theme import Theme

from nml_client.utils.singleton_utils import SingletonInstance


# custom theme for log levels
custom_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "debug": "dim white",
    "trace": "magenta",
})


def _themed(console: Optional[Console]) -> Console:
    """stderr console with the level styles, or the given one with them pushed"""
    if console is None:
        return Console(theme=custom_theme, stderr=True)
    console.push_theme(custom_theme)
    return console


class Logger(SingletonInstance):
    """singleton logger class with rich support"""

    def __init__(
        self,
        prefix: str = "nml-client",
        log_dir: Optional[str] = None,
        console: Optional[Console] = None,
    ):
        """initialize logger

        Args:
            prefix: log message prefix
            log_dir: directory for the log file (no file logging if None)
            console: rich console to render to (stderr by default)
        """
        self.prefix = prefix
        self.log_dir = log_dir
        self.console = _themed(console)
        self.log_file = None
        if log_dir:
            self._ensure_log_dir()
            self.log_file = os.path.join(log_dir, f"{prefix}.log")

    def _ensure_log_dir(self):
        """create log directory if not exists"""
        if not os.path.exists(self.log_dir):
            os.makedirs(self.log_dir)

    def _format(self, level: str, message: str) -> str:
        """format log message"""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return f"[{timestamp}] [{self.prefix}] {level}: {message}"

    def _emit(self, level: str, message: str, style: str):
        line = self._format(level, message)
        # markup off: paths and server output may contain [brackets]
        self.console.print(line, style=style, markup=False, highlight=False)
        if self.log_file:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(line + "\n")

    def info(self, message: str):
        """log info level message"""
        self._emit("INFO", message, "info")

    def error(self, message: str):
        """log error level message"""
        self._emit("ERROR", message, "error")

    def warning(self, message: str):
        """log warning level message"""
        self._emit("WARNING", message, "warning")

    def debug(self, message: str):
        """log debug level message"""
        self._emit("DEBUG", message, "debug")


class TraceChannel:
    """named output sink for human-readable protocol trace lines

    purely diagnostic: nothing in the client depends on what is written here.
    """

    def __init__(
        self,
        name: str,
        language_id: str,
        console: Optional[Console] = None,
    ):
        self.name = name
        self.language_id = language_id
        self.console = _themed(console)

    def append_line(self, message: str):
        self.console.print(
            f"[{self.name}] ({self.language_id}) {message}",
            style="trace",
            markup=False,
            highlight=False,
        )

    def __repr__(self) -> str:
        return f"TraceChannel(name={self.name!r}, language_id={self.language_id!r})"


def logging_func(desc: str = ""):
    """decorator for coroutine logging

    Args:
        desc: description of the function
    """
    def decorator(function):
        async def wrapper(*args, **kwargs):
            Logger.instance().info(f"[start] {function.__name__} - {desc}")
            result = await function(*args, **kwargs)
            Logger.instance().info(f"[end] {function.__name__}")
            return result
        wrapper.__name__ = function.__name__
        wrapper.__doc__ = function.__doc__
        return wrapper
    return decorator
