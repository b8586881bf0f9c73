"""
Pytest configuration and shared fixtures for safe_delete tests.

This module provides:
- A fake home directory so protected paths never point at the real one
- Registry, size oracle and analyzer fixtures
- Reset of the process-wide singletons between tests
"""

import sys
from pathlib import Path

import pytest

# Add src and the repository root to the path for imports
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src"))
sys.path.insert(0, str(root_path))

from safe_delete.analyzer import CommandAnalyzer, DetectionContext  # noqa: E402
from safe_delete.analyzer import command as command_module  # noqa: E402
from safe_delete.scope import ProtectedPathRegistry  # noqa: E402
from safe_delete.scope import registry as registry_module  # noqa: E402
from safe_delete.utils import settings as settings_module  # noqa: E402
from tests.mocks import FakeSizeOracle  # noqa: E402

MIB = 1024 * 1024


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Each test builds its own settings, registry and analyzer."""
    monkeypatch.setattr(settings_module, "_settings", None)
    monkeypatch.setattr(registry_module, "_registry", None)
    monkeypatch.setattr(command_module, "_analyzer", None)


@pytest.fixture
def fake_home(tmp_path) -> Path:
    """A home directory with the usual protected subdirectories."""
    home = tmp_path / "home" / "dev"
    for name in ("Documents", "Desktop", ".ssh", ".config"):
        (home / name).mkdir(parents=True)
    return home


@pytest.fixture
def project(tmp_path) -> Path:
    """Working directory for commands; deliberately outside the fake home."""
    path = tmp_path / "work" / "project"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def cwd(project) -> str:
    return str(project)


@pytest.fixture
def registry(fake_home) -> ProtectedPathRegistry:
    return ProtectedPathRegistry.build(home=str(fake_home))


@pytest.fixture
def sizes() -> FakeSizeOracle:
    return FakeSizeOracle()


@pytest.fixture
def ctx(registry, sizes) -> DetectionContext:
    return DetectionContext(registry=registry, size_oracle=sizes)


@pytest.fixture
def analyzer(registry, sizes) -> CommandAnalyzer:
    return CommandAnalyzer(registry=registry, size_oracle=sizes)


@pytest.fixture
def default_analyzer(monkeypatch, analyzer) -> CommandAnalyzer:
    """Install ``analyzer`` as the process-wide one used by analyze_command."""
    monkeypatch.setattr(command_module, "_analyzer", analyzer)
    return analyzer
