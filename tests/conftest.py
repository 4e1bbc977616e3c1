"""
Pytest fixtures for the asset attribute test suite.

Provides:
- Structured logging configured for the session, LogContext cleared per test
- A deterministic id generator and stores built from it
- The default seed catalog as a session-scoped snapshot

Catalog builders live in ``tests/factories.py``.
"""

import json
import logging
from io import StringIO

import pytest

from asset_config import get_seed_state
from asset_kernel.domain import CatalogState
from asset_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from asset_kernel.services import AttributeStore
from asset_kernel.utils.ids import SequentialIdGenerator
from tests.factories import make_chain_state

# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture asset_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, chain_store):
            chain_store.add_category("Lifts")
            logs = captured_logs()
            assert any(r["message"] == "category_added" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("asset_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Store fixtures
# =============================================================================


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def chain_store(id_generator) -> AttributeStore:
    """Store over the A -> B -> C chain from ``make_chain_state``."""
    return AttributeStore(make_chain_state(), id_generator=id_generator)


@pytest.fixture
def empty_store(id_generator) -> AttributeStore:
    return AttributeStore(CatalogState(), id_generator=id_generator)


@pytest.fixture(scope="session")
def seed_state() -> CatalogState:
    return get_seed_state()


@pytest.fixture
def seeded_store(seed_state, id_generator) -> AttributeStore:
    return AttributeStore(seed_state, id_generator=id_generator)
