from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'cargo_member' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from cargo_member.core.config import Settings, reset_settings_cache
from cargo_member.core.log import reset_stdlib_logging_for_tests
from cargo_member.core.operations import OperationContext
from cargo_member.core.status import RecordingStatusStream
from helpers.fake_cargo import FakeCargo
from helpers.workspace import make_workspace


def _real_cargo() -> str | None:
    return os.environ.get("CARGO") or shutil.which("cargo")


def pytest_collection_modifyitems(config, items):  # type: ignore[no-untyped-def]
    if _real_cargo():
        return
    skip = pytest.mark.skip(reason="cargo is not available")
    for item in items:
        if "requires_cargo" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch):
    """Drop user configuration and cached state between tests."""
    for key in list(os.environ):
        if key.startswith("CARGO_MEMBER_"):
            monkeypatch.delenv(key, raising=False)
    for key in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(key, raising=False)
    reset_settings_cache()
    reset_stdlib_logging_for_tests()
    yield
    reset_settings_cache()
    reset_stdlib_logging_for_tests()


@pytest.fixture
def real_cargo() -> str:
    executable = _real_cargo()
    if not executable:
        pytest.skip("cargo is not available")
    return executable


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def status() -> RecordingStatusStream:
    return RecordingStatusStream()


@pytest.fixture
def fake_cargo(settings: Settings) -> FakeCargo:
    return FakeCargo(settings=settings)


@pytest.fixture
def ctx(settings: Settings, status: RecordingStatusStream, fake_cargo: FakeCargo) -> OperationContext:
    return OperationContext(settings, status, cargo=fake_cargo)


@pytest.fixture
def workspace(tmp_path: Path):
    """Factory: ``workspace(members=[...], exclude=[...], packages=[...])`` -> root."""

    def _make(**kwargs):
        return make_workspace(tmp_path / "ws", **kwargs)

    return _make
