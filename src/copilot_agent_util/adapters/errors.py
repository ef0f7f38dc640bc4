from dataclasses import dataclass
from typing import Any


@dataclass
class AdapterError(Exception):
    message: str
    details: dict[str, Any] | None = None
    hint: str | None = None
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


class SetupError(AdapterError):
    pass


class LogDirectoryError(SetupError):
    pass


class LogFileError(SetupError):
    pass


class SpawnError(AdapterError):
    pass


class CommandNotFound(SpawnError):
    pass


class CommandSpawnError(SpawnError):
    pass


class CommandFailed(AdapterError):
    pass


class StreamWriteError(AdapterError):
    pass


class ConfigError(AdapterError):
    pass
