from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from copilot_agent_util.application.run_command import run_command
from copilot_agent_util.domain.commands import ArgumentError, resolve
from copilot_agent_util.domain.diagnostics import Diagnostic, Severity, ValueLocation
from copilot_agent_util.domain.result import Result
from copilot_agent_util.domain.run_config import RunnerConfig
from copilot_agent_util.ports.command_runner import RunOutcome

logger = logging.getLogger(__name__)


def dispatch(
    config: RunnerConfig,
    key: str,
    args: list[str] | None = None,
    options: Mapping[str, Any] | None = None,
    **run_kwargs: Any,
) -> Result[RunOutcome]:
    try:
        name, argv = resolve(key, list(args or []), options or {})
    except KeyError:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="COMMAND_UNKNOWN",
                    rule="dispatch.lookup",
                    severity=Severity.ERROR,
                    message=f"Unknown command: {key}",
                    location=ValueLocation("command", key),
                )
            ]
        )
    except ArgumentError as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="COMMAND_ARGS_INVALID",
                    rule="dispatch.args",
                    severity=Severity.ERROR,
                    message=f"{key}: {e}",
                    location=ValueLocation("command", key),
                )
            ]
        )
    logger.debug("dispatching %s -> %s %s", key, name, argv)
    return run_command(config, name, argv, **run_kwargs)
