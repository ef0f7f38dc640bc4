from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
import logging
import sys
from typing import BinaryIO

from copilot_agent_util.adapters.errors import (
    AdapterError,
    CommandFailed,
    CommandNotFound,
    LogDirectoryError,
    LogFileError,
    StreamWriteError,
)
from copilot_agent_util.adapters.logs.filesystem import FilesystemLogStore
from copilot_agent_util.adapters.process.subprocess_runner import SubprocessRunner
from copilot_agent_util.adapters.process.tee import LockedFile
from copilot_agent_util.domain.diagnostics import Diagnostic, FileLocation, Severity
from copilot_agent_util.domain.log_record import (
    command_line,
    failure_line,
    render_header,
    success_line,
)
from copilot_agent_util.domain.result import Result
from copilot_agent_util.domain.run_config import RunnerConfig
from copilot_agent_util.ports.command_runner import (
    CommandRunnerPort,
    LogStorePort,
    RunOutcome,
    Terminal,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def default_terminal() -> Terminal:
    # Text written through sys.stdout must land before raw child bytes.
    sys.stdout.flush()
    sys.stderr.flush()
    return Terminal(stdout=sys.stdout.buffer, stderr=sys.stderr.buffer)


def _say(stream: BinaryIO, line: str) -> None:
    stream.write(line.encode("utf-8") + b"\n")
    stream.flush()


def _echo(stream: BinaryIO, line: str) -> None:
    try:
        _say(stream, line)
    except (OSError, ValueError) as e:
        logger.warning("could not write to terminal: %s", e)


def _setup_diagnostic(err: AdapterError) -> Diagnostic:
    if isinstance(err, LogDirectoryError):
        code, rule = "LOG_DIR_CREATE_FAILED", "setup.log_dir"
    else:
        code, rule = "LOG_FILE_CREATE_FAILED", "setup.log_file"
    path = (err.details or {}).get("path")
    return Diagnostic(
        code=code,
        rule=rule,
        severity=Severity.ERROR,
        message=err.message,
        location=FileLocation(str(path)) if path else None,
        details=err.details,
    )


def _execution_diagnostic(err: AdapterError) -> Diagnostic:
    if isinstance(err, CommandNotFound):
        code, rule = "COMMAND_NOT_FOUND", "spawn.resolve"
    elif isinstance(err, CommandFailed):
        code, rule = "COMMAND_FAILED", "child.exit"
    elif isinstance(err, StreamWriteError):
        code, rule = "STREAM_WRITE_FAILED", "tee.write"
    else:
        code, rule = "COMMAND_SPAWN_FAILED", "spawn.start"
    return Diagnostic(
        code=code,
        rule=rule,
        severity=Severity.ERROR,
        message=err.message,
        hint=err.hint,
        details=err.details,
        is_execution=True,
    )


def run_command(
    config: RunnerConfig,
    name: str,
    args: list[str],
    *,
    log_store: LogStorePort | None = None,
    runner: CommandRunnerPort | None = None,
    terminal: Terminal | None = None,
    clock: Clock = _utc_now,
) -> Result[RunOutcome]:
    """Run ``name`` with ``args``, teeing its output to the terminal and a log file.

    Returns a Result whose ``exit_code`` is 0 only when the child exited 0.
    Setup failures (log directory, log file) are reported before anything is
    spawned. The log file, once opened, always receives a trailing status
    line and is closed before returning.
    """
    store = log_store or FilesystemLogStore(config.log_dir)
    proc_runner = runner or SubprocessRunner()
    term = terminal or default_terminal()
    outcome = RunOutcome(command=name, args=list(args))

    try:
        store.ensure_dir()
        started_at = clock()
        log_path, handle = store.create(name, started_at)
    except (LogDirectoryError, LogFileError) as e:
        logger.debug("setup failed: %s", e)
        _echo(term.stderr, f"Error: {e.message}")
        return Result(value=outcome, diagnostics=[_setup_diagnostic(e)])

    outcome.log_path = log_path
    with handle:
        log_file = LockedFile(handle)
        try:
            log_file.write(render_header(name, args, str(config.working_dir), started_at).encode("utf-8"))
        except OSError as e:
            err = LogFileError(
                f"failed to write log file {log_path}: {e.strerror or e}",
                details={"path": str(log_path)},
                cause=e,
            )
            _echo(term.stderr, f"Error: {err.message}")
            return Result(value=outcome, diagnostics=[_setup_diagnostic(err)])

        error: AdapterError | None = None
        try:
            _say(term.stdout, f"Executing: {command_line(name, args)}")
            _say(term.stdout, f"Log file: {log_path}")
        except (OSError, ValueError) as e:
            error = StreamWriteError(f"write stdout: {e}", details={"stream": "stdout"}, cause=e)

        if error is None:
            try:
                outcome.returncode = proc_runner.run(name, list(args), config.working_dir, log_file, term)
            except AdapterError as e:
                error = e

        diagnostics: list[Diagnostic] = []
        if error is None:
            status, status_stream = success_line(), term.stdout
        else:
            if isinstance(error, CommandFailed):
                outcome.returncode = (error.details or {}).get("returncode")
            diagnostics.append(_execution_diagnostic(error))
            status, status_stream = failure_line(error.message), term.stderr
        # The log gets the status line even when the terminal is gone.
        log_file.write_line(status)
        _echo(status_stream, status)

    logger.debug("log written to %s", log_path)
    return Result(value=outcome, diagnostics=diagnostics)
