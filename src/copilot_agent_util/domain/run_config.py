from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_LOG_DIR_NAME = "logs"


@dataclass(frozen=True)
class RunnerConfig:
    """Settings shared by every wrapped invocation of one process.

    Built once at startup and passed by reference; the working directory is
    a snapshot and is never re-read from the host afterwards.
    """

    working_dir: Path
    log_dir: Path
    verbose: bool = False

    @classmethod
    def for_directory(
        cls,
        working_dir: Path,
        log_dir: Path | None = None,
        verbose: bool = False,
    ) -> RunnerConfig:
        root = working_dir.resolve()
        if log_dir is None:
            resolved_log_dir = root / DEFAULT_LOG_DIR_NAME
        elif log_dir.is_absolute():
            resolved_log_dir = log_dir
        else:
            resolved_log_dir = root / log_dir
        return cls(working_dir=root, log_dir=resolved_log_dir, verbose=verbose)
