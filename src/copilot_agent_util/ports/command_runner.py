from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Protocol


@dataclass
class RunOutcome:
    command: str
    args: list[str] = field(default_factory=list)
    log_path: Path | None = None
    returncode: int | None = None


@dataclass
class Terminal:
    stdout: BinaryIO
    stderr: BinaryIO


class LogSink(Protocol):
    def write(self, data: bytes) -> int: ...


class CommandRunnerPort(Protocol):
    def run(
        self,
        name: str,
        args: list[str],
        cwd: Path,
        log_sink: LogSink,
        terminal: Terminal,
    ) -> int: ...


class LogStorePort(Protocol):
    def ensure_dir(self) -> Path: ...
    def create(self, name: str, started_at: datetime) -> tuple[Path, BinaryIO]: ...
