from __future__ import annotations

import threading
from typing import BinaryIO

from copilot_agent_util.ports.command_runner import LogSink


class LockedFile:
    """A binary file shared by several writer threads.

    Buffered file objects make no atomicity promise for concurrent
    ``write`` calls, so every write and flush holds one lock.
    """

    def __init__(self, handle: BinaryIO) -> None:
        self._handle = handle
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        with self._lock:
            written = self._handle.write(data)
            self._handle.flush()
            return written

    def write_line(self, line: str) -> int:
        return self.write(line.encode("utf-8") + b"\n")


class TeeSink:
    """Forward every chunk to the terminal first, then to the log file.

    A failed terminal write propagates and the chunk is not logged. The
    returned count is the one reported by the log file.
    """

    def __init__(self, terminal: BinaryIO, log_file: LogSink) -> None:
        self.terminal = terminal
        self.log_file = log_file

    def write(self, data: bytes) -> int:
        self.terminal.write(data)
        self.terminal.flush()
        return self.log_file.write(data)
