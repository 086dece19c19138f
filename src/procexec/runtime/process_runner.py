"""Process runner that executes a child to completion and captures its output.

procexec runtime module v0.1.0

This module provides:
- Blocking run-to-completion of a single executable
- Concurrent stdout/stderr draining into per-stream locked buffers
- Optional stdin payload, closed right after it is written
- An anyio-based async adapter over the same blocking core

Key design points:
- Each stream gets its own reader thread, so a child writing heavily to
  both stdout and stderr cannot fill one OS pipe while we block on the other
- Without an input payload stdin is /dev/null, never an open pipe
- Start failures (missing executable, permissions, bad cwd) propagate as the
  original OSError; abnormal termination raises ProcessExecutionError
"""

from __future__ import annotations

import logging
import os
import subprocess
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, NamedTuple
from urllib.parse import urlparse
from urllib.request import url2pathname

import anyio

from ..config import get_config
from ..errors import ProcessExecutionError

__all__ = [
    "ProcessOutput",
    "ProcessRunner",
    "ProcessSpec",
    "run_process",
    "run_process_async",
]

logger = logging.getLogger(__name__)


def _resolve_executable(executable: str | Path) -> Path:
    """Turn a path or ``file://`` URL into a filesystem path.

    Relative paths with a directory component are anchored to our own
    working directory, not the child's; bare names are left for PATH lookup.
    """
    if isinstance(executable, Path):
        path = executable
        has_directory = len(path.parts) > 1
    elif not executable:
        raise ValueError("executable must not be empty")
    elif "://" in executable:
        parsed = urlparse(executable)
        if parsed.scheme != "file":
            raise ValueError(f"unsupported executable URL scheme: {parsed.scheme!r}")
        path = Path(url2pathname(parsed.path))
        has_directory = True
    else:
        path = Path(executable)
        has_directory = any(sep in executable for sep in (os.sep, os.altsep) if sep)

    if has_directory and not path.is_absolute():
        path = path.absolute()
    return path


@dataclass(frozen=True)
class ProcessSpec:
    """Specification for a process to run.

    Attributes:
        executable: Path (or file:// URL) of the executable
        arguments: Arguments passed after the executable
        working_directory: Working directory (None = executable's directory)
        input: Optional text written UTF-8 encoded to stdin, then closed
    """

    executable: Path
    arguments: tuple[str, ...] = ()
    working_directory: Path | None = None
    input: str | None = None

    def __post_init__(self) -> None:
        """Normalize executable and working_directory to Path, arguments to a tuple."""
        object.__setattr__(self, "executable", _resolve_executable(self.executable))
        object.__setattr__(self, "arguments", tuple(self.arguments))
        if self.working_directory is not None:
            object.__setattr__(self, "working_directory", Path(self.working_directory))

    @property
    def cwd(self) -> Path:
        """Resolved working directory for the child."""
        if self.working_directory is not None:
            return self.working_directory
        return self.executable.parent

    @property
    def argv(self) -> list[str]:
        return [str(self.executable), *self.arguments]


class ProcessOutput(NamedTuple):
    """Output of a process that exited with status 0."""

    status: int
    out: str
    err: str


class _OutputBuffer:
    """Append-only byte buffer filled by one reader thread."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = threading.Lock()
        self._data = bytearray()

    def append(self, chunk: bytes) -> None:
        with self._lock:
            self._data += chunk

    def decode(self) -> str:
        """Decode as UTF-8; undecodable output becomes an empty string."""
        with self._lock:
            try:
                return self._data.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.debug(f"Discarding undecodable {self.name} ({len(self._data)} bytes): {e}")
                return ""


def _drain(stream: IO[bytes], buffer: _OutputBuffer, chunk_size: int) -> None:
    """Read a pipe until EOF, appending every chunk to buffer."""
    while True:
        chunk = stream.read1(chunk_size)  # type: ignore[attr-defined]
        if not chunk:
            break
        buffer.append(chunk)


def _truncate_for_log(text: str, limit: int) -> str:
    if limit == 0 or len(text) <= limit:
        return text
    return f"{text[:limit]}... [{len(text) - limit} more chars]"


@dataclass
class ProcessRunner:
    """Runs one child process to completion and captures its output.

    Example:
        runner = ProcessRunner()
        spec = ProcessSpec(
            executable=Path("/usr/bin/git"),
            arguments=("status", "--short"),
            working_directory=Path("/workspace"),
        )
        status, out, err = runner.run(spec)

    Attributes:
        read_chunk_size: Bytes requested per pipe read
        log_output_limit: Max characters of captured output per log record
    """

    read_chunk_size: int = field(default_factory=lambda: get_config().read_chunk_size)
    log_output_limit: int = field(default_factory=lambda: get_config().log_output_limit)

    def run(self, spec: ProcessSpec) -> ProcessOutput:
        """Run the process and block until it exits.

        This method:
        1. Starts the process with stdout/stderr piped
        2. Drains both pipes on dedicated reader threads
        3. Writes spec.input to stdin and closes it, if provided
        4. Waits for exit, then joins the readers
        5. Returns the output, or raises on abnormal termination

        Args:
            spec: Process specification

        Returns:
            ProcessOutput with status 0 and the captured text

        Raises:
            OSError: If the process could not be started
            ProcessExecutionError: If the process was signaled or exited non-zero
        """
        input_desc = f"{len(spec.input)} chars" if spec.input is not None else "none"
        logger.info(
            f"Process.run executable={spec.executable}, input={input_desc}, "
            f"arguments={', '.join(spec.arguments)}"
        )

        # Encoding errors must surface before a child exists
        input_bytes = spec.input.encode("utf-8") if spec.input is not None else None

        process = subprocess.Popen(
            spec.argv,
            stdin=subprocess.PIPE if spec.input is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=spec.cwd,
        )
        logger.debug(f"Started subprocess pid={process.pid} cwd={spec.cwd}")

        stdout_buffer = _OutputBuffer("stdout")
        stderr_buffer = _OutputBuffer("stderr")
        readers = [
            threading.Thread(
                target=_drain,
                args=(stream, buffer, self.read_chunk_size),
                name=f"procexec-{buffer.name}-{process.pid}",
                daemon=True,
            )
            for stream, buffer in (
                (process.stdout, stdout_buffer),
                (process.stderr, stderr_buffer),
            )
        ]
        for reader in readers:
            reader.start()

        if input_bytes is not None and process.stdin:
            self._write_input(process, process.stdin, input_bytes)

        returncode = process.wait()

        for reader in readers:
            reader.join()
        process.stdout.close()  # type: ignore[union-attr]
        process.stderr.close()  # type: ignore[union-attr]

        out = stdout_buffer.decode()
        err = stderr_buffer.decode()

        logger.debug(f"Subprocess completed pid={process.pid} returncode={returncode}")
        logger.info(f"Process.run output: {_truncate_for_log(out, self.log_output_limit)}")
        if err:
            logger.error(f"Process.run error: {_truncate_for_log(err, self.log_output_limit)}")

        if returncode != 0:
            raise ProcessExecutionError(
                executable=str(spec.executable),
                arguments=spec.arguments,
                pid=process.pid,
                returncode=returncode,
                standard_output=out,
                standard_error=err,
            )

        return ProcessOutput(returncode, out, err)

    async def run_async(self, spec: ProcessSpec) -> ProcessOutput:
        """Run the process on a worker thread.

        The blocking wait happens in anyio's thread pool; cancelling the
        caller does not abandon the wait.
        """
        return await anyio.to_thread.run_sync(self.run, spec)

    def _write_input(self, process: subprocess.Popen, stdin: IO[bytes], data: bytes) -> None:
        """Write data to stdin and close it so the child sees EOF.

        A child may exit without reading its input; the broken pipe is not an
        error here since its exit status decides the outcome.
        """
        try:
            stdin.write(data)
        except BrokenPipeError:
            logger.debug(f"Subprocess pid={process.pid} closed stdin before reading all input")
        try:
            stdin.close()
        except BrokenPipeError:
            logger.debug(f"Subprocess pid={process.pid} closed stdin before flush")


def run_process(
    executable: str | Path,
    *arguments: str,
    working_directory: str | Path | None = None,
    input: str | None = None,
) -> ProcessOutput:
    """Run an executable and return its output.

    Convenience wrapper for ``ProcessRunner().run(ProcessSpec(...))``.

    Example:
        status, out, err = run_process("/bin/echo", "hello")
    """
    spec = ProcessSpec(
        executable=executable,  # type: ignore[arg-type]
        arguments=arguments,
        working_directory=working_directory,  # type: ignore[arg-type]
        input=input,
    )
    return ProcessRunner().run(spec)


async def run_process_async(
    executable: str | Path,
    *arguments: str,
    working_directory: str | Path | None = None,
    input: str | None = None,
) -> ProcessOutput:
    """Async variant of run_process."""
    spec = ProcessSpec(
        executable=executable,  # type: ignore[arg-type]
        arguments=arguments,
        working_directory=working_directory,  # type: ignore[arg-type]
        input=input,
    )
    return await ProcessRunner().run_async(spec)
