"""Shared test fixtures."""

import subprocess
import sys
from pathlib import Path

import pytest

# Add project root to path for package imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class MockContext:
    """Mock Context for testing the probe without a real vos binary."""

    def __init__(
        self,
        tools_available: dict[str, str] | None = None,
        command_outputs: dict[tuple, str | Exception] | None = None,
        files: list[str] | None = None,
        returncode: int = 0,
    ):
        self.tools_available = tools_available or {}
        self.command_outputs = command_outputs or {}
        self.files = set(files or [])
        self.returncode = returncode
        self.commands_run: list[list[str]] = []
        self.timeouts: list[int | None] = []

    def which(self, name: str) -> str | None:
        """Return the mocked absolute path of a tool."""
        return self.tools_available.get(name)

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        timeout: int | None = None,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """Return mocked command output."""
        self.commands_run.append(cmd)
        self.timeouts.append(timeout)
        key = tuple(cmd)
        if key not in self.command_outputs:
            raise KeyError(f"No mock output for command: {cmd}")

        output = self.command_outputs[key]
        if isinstance(output, Exception):
            raise output

        return subprocess.CompletedProcess(
            cmd,
            returncode=self.returncode,
            stdout=output,
            stderr="",
        )

    def file_exists(self, path: str) -> bool:
        """Check if path is in mocked files."""
        return path in self.files


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep user and project config files out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    return home


def load_fixture(name: str) -> str:
    """Load a vos output fixture by name."""
    fixture_path = FIXTURES_DIR / "vos" / name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text()
