"""
Shared pytest fixtures and configuration for chaincore tests.

This module provides:
- Settings cache cleanup for test isolation
- A sample chaincode with a handful of operations
- Local environment factories
- Migration unit directories

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    async def test_something(chaincode, make_env):
        response = await chaincode.invoke(make_env("ping"))
"""

import json
import logging
import textwrap
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from chaincore.core.config import clear_settings_cache
from chaincore.framework import Chaincode, LocalEnvironment, Response
from chaincore.framework.logging import clear_context


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path) or "cli" in test_path.parts:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Drop cached settings, CHAINCORE_* variables and stray log handlers around each test.

    Keeps a developer's shell environment from leaking into assertions.
    """
    monkeypatch.delenv("CHAINCORE_MIGRATIONS_PATH", raising=False)
    monkeypatch.delenv("CHAINCORE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CHAINCORE_LOG_FORMAT", raising=False)
    clear_settings_cache()
    root = logging.getLogger()
    handlers = root.handlers[:]
    yield
    clear_settings_cache()
    clear_context()
    root.handlers[:] = handlers


# =============================================================================
# Chaincode Fixtures
# =============================================================================


@pytest.fixture
def chaincode() -> Chaincode:
    """
    Sample chaincode with operations covering the common return shapes.

    - echo: returns its arguments as a list
    - get_bytes: returns raw bytes
    - nothing: returns None
    - boom: raises a plain error
    - sync_add: synchronous handler
    """
    cc = Chaincode("SampleChaincode")

    @cc.operation()
    async def echo(stub, tx_helper, *args):
        """Echo the decoded arguments."""
        return list(args)

    @cc.operation("get_bytes")
    async def get_bytes(stub, tx_helper):
        return b"\x00raw"

    @cc.operation()
    async def nothing(stub, tx_helper):
        return None

    @cc.operation()
    async def boom(stub, tx_helper):
        raise RuntimeError("boom")

    @cc.operation()
    def sync_add(stub, tx_helper, a, b):
        return {"sum": a + b}

    return cc


@pytest.fixture
def make_env() -> Callable[..., LocalEnvironment]:
    """Factory for local environments with a fixed transaction id."""

    def _make_env(fcn: str, *params: str, tx_id: str = "tx-0001") -> LocalEnvironment:
        return LocalEnvironment(fcn=fcn, params=params, tx_id=tx_id)

    return _make_env


@pytest.fixture
def decode_error() -> Callable[[Response], dict[str, Any]]:
    """Decode the serialized error carried by a failed response."""

    def _decode(response: Response) -> dict[str, Any]:
        assert not response.ok
        return json.loads(response.message)

    return _decode


# =============================================================================
# Migration Fixtures
# =============================================================================


@pytest.fixture
def migrations_dir(tmp_path: Path) -> Path:
    """Directory with two numbered migration units and one helper module."""
    d = tmp_path / "migrations"
    d.mkdir()

    (d / "001_create_index.py").write_text(
        textwrap.dedent("""\
            def migrate(chaincode, stub, tx_helper, args):
                chaincode.applied.append("001")
                return "001"
        """),
        encoding="utf-8",
    )
    (d / "002_backfill.py").write_text(
        textwrap.dedent("""\
            async def migrate(chaincode, stub, tx_helper, args):
                chaincode.applied.append("002")
                return {"unit": "002", "args": args}
        """),
        encoding="utf-8",
    )
    (d / "_shared.py").write_text("raise RuntimeError('helpers are not units')\n", encoding="utf-8")
    return d
