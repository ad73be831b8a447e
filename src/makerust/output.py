"""Colorized status output with an optional activity log mirror."""

import os
import sys
from typing import TextIO

from makerust.core.logging import log_activity

# ── Terminal UI ────────────────────────────────────────────────────────────

RESET = "\033[0m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
BLUE = "\033[34m"


def _safe_print(*args, **kwargs):
    """Print, silently ignoring BrokenPipeError."""
    try:
        print(*args, **kwargs)
    except BrokenPipeError:
        pass


def _use_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class OutputChannel:
    """Prefixed status lines: green info, yellow warning, red error, blue debug."""

    def __init__(self, name: str = "makerust", debug: bool = False,
                 stream: TextIO | None = None, err_stream: TextIO | None = None,
                 activity_log: str = "", color: bool | None = None):
        self.name = name
        self.debug_enabled = debug
        self.stream = stream or sys.stdout
        self.err_stream = err_stream or sys.stderr
        self.activity_log = activity_log
        self.color = _use_color(self.stream) if color is None else color

    def _prefix(self, color: str) -> str:
        if not self.color:
            return f"{self.name}:"
        return f"{color}{self.name}:{RESET}"

    def paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.color else text

    def _emit(self, color: str, level: str, message: str, stream: TextIO) -> None:
        _safe_print(f"{self._prefix(color)} {message}", file=stream, flush=True)
        log_activity(self.activity_log, level, message)

    def info(self, message: str) -> None:
        self._emit(GREEN, "info", message, self.stream)

    def warn(self, message: str) -> None:
        self._emit(YELLOW, "warn", message, self.stream)

    def error(self, message: str) -> None:
        self._emit(RED, "error", message, self.err_stream)

    def debug(self, message: str) -> None:
        if self.debug_enabled:
            self._emit(BLUE, "debug", message, self.stream)

    def raw(self, text: str) -> None:
        """Pass child process output through untouched."""
        try:
            self.stream.write(text)
            self.stream.flush()
        except BrokenPipeError:
            pass
