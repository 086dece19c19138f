"""Runtime module for running child processes to completion.

This module provides blocking process execution with concurrent output
capture, plus an async adapter for callers running on an event loop.
"""

from __future__ import annotations

from .process_runner import (
    ProcessOutput,
    ProcessRunner,
    ProcessSpec,
    run_process,
    run_process_async,
)

__all__ = [
    "ProcessOutput",
    "ProcessRunner",
    "ProcessSpec",
    "run_process",
    "run_process_async",
]
