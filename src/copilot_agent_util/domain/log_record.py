from __future__ import annotations

from datetime import datetime
from pathlib import PurePath
import shlex
import signal

OUTPUT_SEPARATOR = "--- Output ---"
SUCCESS_LINE = "Command completed successfully"
FAILURE_PREFIX = "Command failed: "


def command_line(name: str, args: list[str]) -> str:
    return shlex.join([name, *args])


def log_stem(name: str, started_at: datetime) -> str:
    program = PurePath(name).name or name
    return f"{program}_{int(started_at.timestamp())}"


def log_file_name(name: str, started_at: datetime, attempt: int = 0) -> str:
    """Return the log file name for the ``attempt``-th try within one second.

    The first try is ``<program>_<unix-seconds>.log``; later tries append a
    counter so an earlier log from the same second is never overwritten.
    """
    stem = log_stem(name, started_at)
    if attempt == 0:
        return f"{stem}.log"
    return f"{stem}_{attempt}.log"


def render_header(name: str, args: list[str], working_dir: str, started_at: datetime) -> str:
    timestamp = started_at.astimezone().isoformat(timespec="seconds")
    lines = [
        f"Command: {command_line(name, args)}",
        f"Working Directory: {working_dir}",
        f"Timestamp: {timestamp}",
        OUTPUT_SEPARATOR,
    ]
    return "\n".join(lines) + "\n"


def success_line() -> str:
    return SUCCESS_LINE


def failure_line(detail: str) -> str:
    return f"{FAILURE_PREFIX}{detail}"


def describe_returncode(returncode: int) -> str:
    if returncode < 0:
        try:
            signame = signal.Signals(-returncode).name
        except ValueError:
            signame = str(-returncode)
        return f"signal: {signame}"
    return f"exit status {returncode}"


def not_found_detail(name: str) -> str:
    return f'exec: "{name}": executable file not found in $PATH'
