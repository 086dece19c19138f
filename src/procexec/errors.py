"""Exception types for process execution.

procexec v0.1.0
"""

from __future__ import annotations

import signal as _signal
from collections.abc import Sequence
from enum import Enum

__all__ = [
    "ProcessError",
    "ProcessExecutionError",
    "TerminationReason",
]


class TerminationReason(str, Enum):
    """How a child process ended.

    - exit: the process returned from main / called exit()
    - uncaught_signal: the process was killed by a signal
    """

    EXIT = "exit"
    UNCAUGHT_SIGNAL = "uncaught_signal"


def _signal_name(signum: int) -> str:
    """Symbolic name for a signal number, or "unknown"."""
    try:
        return _signal.Signals(signum).name
    except ValueError:
        return "unknown"


class ProcessError(Exception):
    """Base exception for procexec."""
    pass


class ProcessExecutionError(ProcessError):
    """A process started but did not exit cleanly with status 0.

    Termination metadata is stored as plain data so callers can inspect it
    after the child has been reaped.

    Attributes:
        executable: Path of the executable that was run
        arguments: Arguments passed to the executable
        pid: Process id of the terminated child
        returncode: Raw ``Popen.returncode`` (negative when signaled)
        termination_reason: EXIT or UNCAUGHT_SIGNAL
        exit_status: Exit code, or the signal number when signaled
        signal: Signal number that killed the process, if any
        standard_output: Stdout captured before termination
        standard_error: Stderr captured before termination
    """

    def __init__(
        self,
        executable: str,
        arguments: Sequence[str],
        pid: int,
        returncode: int,
        standard_output: str = "",
        standard_error: str = "",
    ) -> None:
        self.executable = executable
        self.arguments = tuple(arguments)
        self.pid = pid
        self.returncode = returncode
        if returncode < 0:
            self.termination_reason = TerminationReason.UNCAUGHT_SIGNAL
            self.signal: int | None = -returncode
            self.exit_status = -returncode
        else:
            self.termination_reason = TerminationReason.EXIT
            self.signal = None
            self.exit_status = returncode
        self.standard_output = standard_output
        self.standard_error = standard_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.signal is not None:
            return (
                f"{self.executable} terminated by signal {self.signal} "
                f"({_signal_name(self.signal)})"
            )
        return f"{self.executable} exited with status {self.exit_status}"
