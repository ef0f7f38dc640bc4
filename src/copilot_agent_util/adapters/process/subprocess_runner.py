from __future__ import annotations

import logging
from pathlib import Path
import subprocess
import threading
from typing import BinaryIO

from copilot_agent_util.adapters.errors import (
    CommandFailed,
    CommandNotFound,
    CommandSpawnError,
    StreamWriteError,
)
from copilot_agent_util.adapters.process.tee import TeeSink
from copilot_agent_util.domain.log_record import describe_returncode, not_found_detail
from copilot_agent_util.ports.command_runner import LogSink, Terminal

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class _StreamPump(threading.Thread):
    """Copy one child pipe into a TeeSink in arrival order."""

    def __init__(self, stream_name: str, pipe: BinaryIO, sink: TeeSink) -> None:
        super().__init__(name=f"tee-{stream_name}", daemon=True)
        self.stream_name = stream_name
        self.pipe = pipe
        self.sink = sink
        self.error: Exception | None = None

    def run(self) -> None:
        try:
            while True:
                chunk = self.pipe.read1(CHUNK_SIZE)  # type: ignore[attr-defined]
                if not chunk:
                    break
                if self.error is not None:
                    # Keep draining so the child never blocks on a full pipe.
                    continue
                try:
                    self.sink.write(chunk)
                except Exception as exc:  # closed streams raise ValueError
                    logger.debug("write to %s failed: %s", self.stream_name, exc)
                    self.error = exc
        finally:
            self.pipe.close()


class SubprocessRunner:
    def run(
        self,
        name: str,
        args: list[str],
        cwd: Path,
        log_sink: LogSink,
        terminal: Terminal,
    ) -> int:
        cmd = [name, *args]
        logger.debug("spawning %s in %s", cmd, cwd)
        if not cwd.is_dir():
            raise CommandSpawnError(
                f"chdir {cwd}: no such directory",
                details={"command": name, "cwd": str(cwd)},
            )
        try:
            proc = subprocess.Popen(
                cmd,
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                close_fds=True,
            )
        except FileNotFoundError as e:
            raise CommandNotFound(
                not_found_detail(name),
                details={"command": name},
                hint="Check that the program is installed and on PATH.",
                cause=e,
            )
        except OSError as e:
            raise CommandSpawnError(
                f"exec: {name!r}: {e.strerror or e}",
                details={"command": name, "errno": e.errno},
                cause=e,
            )

        assert proc.stdout is not None and proc.stderr is not None
        pumps = [
            _StreamPump("stdout", proc.stdout, TeeSink(terminal.stdout, log_sink)),
            _StreamPump("stderr", proc.stderr, TeeSink(terminal.stderr, log_sink)),
        ]
        for pump in pumps:
            pump.start()
        returncode = proc.wait()
        for pump in pumps:
            pump.join()
        logger.debug("%s exited with %s", name, returncode)

        if returncode != 0:
            raise CommandFailed(
                describe_returncode(returncode),
                details={"command": name, "returncode": returncode},
            )
        for pump in pumps:
            if pump.error is not None:
                raise StreamWriteError(
                    f"write {pump.stream_name}: {pump.error}",
                    details={"stream": pump.stream_name},
                    cause=pump.error,
                )
        return returncode
