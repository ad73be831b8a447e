# Copyright 2026. Activity log writing and timestamp helpers.

import re
from datetime import datetime, timezone

_ANSI_RE = re.compile(r"\033\[[0-9;]*m")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%H:%M:%S")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def log_activity(log_path: str, source: str, message: str) -> None:
    if not log_path:
        return
    ts = utc_timestamp()
    message = strip_ansi(message)
    line = f"[{ts}] {source}  {message}\n" if source else f"[{ts}] {message}\n"
    try:
        with open(log_path, "a") as f:
            f.write(line)
    except OSError:
        pass


def format_duration(seconds: float) -> str:
    if seconds >= 60:
        minutes = int(seconds // 60)
        return f"{minutes}m {seconds - minutes * 60:04.1f}s"
    return f"{seconds:.2f}s"
