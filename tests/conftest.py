"""Pytest configuration and fixtures."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path

import pytest

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# Add src to the Python path
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def python_executable() -> Path:
    """Absolute path of the running interpreter."""
    return Path(sys.executable).resolve()


@pytest.fixture
def noisy_cli() -> str:
    """Path of the noisy child script."""
    return str(FIXTURES_DIR / "noisy_cli.py")


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Create temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


def _require_tool(name: str) -> Path:
    path = shutil.which(name)
    if path is None:
        pytest.skip(f"{name} not available")
    return Path(path)


@pytest.fixture
def echo_executable() -> Path:
    return _require_tool("echo")


@pytest.fixture
def cat_executable() -> Path:
    return _require_tool("cat")


@pytest.fixture
def false_executable() -> Path:
    return _require_tool("false")


@pytest.fixture(autouse=True)
def clean_procexec_env(monkeypatch: pytest.MonkeyPatch):
    """Run every test with default PROCEXEC_* configuration."""
    for name in ("PROCEXEC_READ_CHUNK_SIZE", "PROCEXEC_LOG_OUTPUT_LIMIT", "PROCEXEC_LOG_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    from procexec.config import reload_config

    reload_config()
    yield
    reload_config()
