from datetime import datetime
import logging
from pathlib import Path
from typing import BinaryIO

from copilot_agent_util.adapters.errors import LogDirectoryError, LogFileError
from copilot_agent_util.domain.log_record import log_file_name

logger = logging.getLogger(__name__)

MAX_NAME_ATTEMPTS = 1000


class FilesystemLogStore:
    def __init__(self, root: Path) -> None:
        self.root = root

    def ensure_dir(self) -> Path:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LogDirectoryError(
                f"failed to create log directory {self.root}: {e.strerror or e}",
                details={"path": str(self.root)},
                cause=e,
            )
        return self.root

    def create(self, name: str, started_at: datetime) -> tuple[Path, BinaryIO]:
        """Open a fresh log file for ``name``; never reuses an existing one."""
        for attempt in range(MAX_NAME_ATTEMPTS):
            path = self.root / log_file_name(name, started_at, attempt)
            try:
                handle = path.open("xb")
            except FileExistsError:
                logger.debug("log file %s already exists", path)
                continue
            except OSError as e:
                raise LogFileError(
                    f"failed to create log file {path}: {e.strerror or e}",
                    details={"path": str(path)},
                    cause=e,
                )
            return path, handle
        raise LogFileError(
            f"no free log file name for {name} after {MAX_NAME_ATTEMPTS} attempts",
            details={"path": str(self.root)},
        )
