"""procexec environment configuration.

Environment variables:
    PROCEXEC_READ_CHUNK_SIZE: Bytes requested per pipe read
        - Default 65536
        - Clamped to 1..1048576, invalid values fall back to the default

    PROCEXEC_LOG_OUTPUT_LIMIT: Max characters of captured output per log record
        - Default 4000
        - 0 = no truncation, invalid values fall back to the default

    PROCEXEC_LOG_DEBUG: Debug logging mode
        - true/1/yes/on = write DEBUG logs to a temporary file
        - false/0/no/off = INFO logs to stderr (default)
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

__all__ = ["Config", "load_config", "get_config", "reload_config"]

DEFAULT_READ_CHUNK_SIZE = 65536
MAX_READ_CHUNK_SIZE = 1024 * 1024
DEFAULT_LOG_OUTPUT_LIMIT = 4000


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse a boolean environment variable."""
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def _parse_chunk_size(value: str | None) -> int:
    """Parse PROCEXEC_READ_CHUNK_SIZE."""
    if not value:
        return DEFAULT_READ_CHUNK_SIZE
    try:
        size = int(value)
    except ValueError:
        return DEFAULT_READ_CHUNK_SIZE
    return max(1, min(size, MAX_READ_CHUNK_SIZE))


def _parse_log_output_limit(value: str | None) -> int:
    """Parse PROCEXEC_LOG_OUTPUT_LIMIT."""
    if not value:
        return DEFAULT_LOG_OUTPUT_LIMIT
    try:
        limit = int(value)
    except ValueError:
        return DEFAULT_LOG_OUTPUT_LIMIT
    return limit if limit >= 0 else DEFAULT_LOG_OUTPUT_LIMIT


def _generate_log_file_path() -> str:
    """Build a timestamped log file path under the system temp directory."""
    log_dir = Path(tempfile.gettempdir()) / "procexec"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"procexec_debug_{timestamp}.log"
    return str(log_file.resolve())


@dataclass
class Config:
    """procexec configuration.

    Attributes:
        read_chunk_size: Bytes requested per pipe read
        log_output_limit: Max characters of captured output per log record (0 = unlimited)
        log_debug: Write DEBUG logs to a temporary file
        log_file: Log file path (set automatically when log_debug=True)
    """

    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE
    log_output_limit: int = DEFAULT_LOG_OUTPUT_LIMIT
    log_debug: bool = False
    log_file: str | None = None

    def __repr__(self) -> str:
        return (
            f"Config(read_chunk_size={self.read_chunk_size}, "
            f"log_output_limit={self.log_output_limit}, "
            f"log_debug={self.log_debug}, "
            f"log_file={self.log_file})"
        )


def load_config() -> Config:
    """Load configuration from environment variables."""
    log_debug = _parse_bool(os.environ.get("PROCEXEC_LOG_DEBUG"), default=False)
    log_file = _generate_log_file_path() if log_debug else None

    return Config(
        read_chunk_size=_parse_chunk_size(os.environ.get("PROCEXEC_READ_CHUNK_SIZE")),
        log_output_limit=_parse_log_output_limit(os.environ.get("PROCEXEC_LOG_OUTPUT_LIMIT")),
        log_debug=log_debug,
        log_file=log_file,
    )


# Global config instance (lazy)
_config: Config | None = None


def get_config() -> Config:
    """Return the global configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Reload configuration from the environment (used by tests)."""
    global _config
    _config = load_config()
    return _config
