"""procexec - run a child process to completion and capture its output.

Environment variables:
    PROCEXEC_READ_CHUNK_SIZE: Bytes requested per pipe read (default 65536)
    PROCEXEC_LOG_OUTPUT_LIMIT: Max characters of output per log record (default 4000)
    PROCEXEC_LOG_DEBUG: Write DEBUG logs to a temporary file (default false)

Usage:
    from procexec import run_process

    status, out, err = run_process("/bin/echo", "hello")
"""

__version__ = "0.1.0"

from .errors import ProcessError, ProcessExecutionError, TerminationReason
from .logging_setup import configure_logging
from .runtime import (
    ProcessOutput,
    ProcessRunner,
    ProcessSpec,
    run_process,
    run_process_async,
)

__all__ = [
    "__version__",
    "ProcessError",
    "ProcessExecutionError",
    "ProcessOutput",
    "ProcessRunner",
    "ProcessSpec",
    "TerminationReason",
    "configure_logging",
    "run_process",
    "run_process_async",
]
