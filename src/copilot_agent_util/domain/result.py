from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from copilot_agent_util.domain.diagnostics import Diagnostic, Severity

T = TypeVar("T")

EXIT_OK = 0
EXIT_FAILURE = 1


def _new_diagnostics() -> list[Diagnostic]:
    return []


@dataclass
class Result(Generic[T]):
    value: T | None = None
    diagnostics: list[Diagnostic] = field(default_factory=_new_diagnostics)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def exit_code(self) -> int:
        # Setup, spawn and child failures all collapse to the same status.
        if self.errors:
            return EXIT_FAILURE
        return EXIT_OK
