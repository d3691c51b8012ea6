"""Pytest fixtures for HistoryBlock tests."""

import pytest

from historyblock import create_app
from historyblock.core.blocking import (
    ChangeNotifier,
    HistoryBlock,
    PatternStore,
    RecordingHistoryPurger,
    VisitFilter,
)
from historyblock.core.storage import MemorySyncStorage


@pytest.fixture
def app():
    """Create application for testing.

    Returns:
        Flask: Application configured for testing (in-memory storage)
    """
    app = create_app('testing')
    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create test CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def storage():
    """Empty in-memory storage area."""
    return MemorySyncStorage()


@pytest.fixture
def notifier():
    """Notifier delivering inline."""
    return ChangeNotifier(synchronous=True)


@pytest.fixture
def store(storage, notifier):
    """PatternStore over in-memory storage."""
    return PatternStore(storage, notifier)


@pytest.fixture
def history_block(store):
    """HistoryBlock wired with a recording purger."""
    return HistoryBlock(store, VisitFilter(), RecordingHistoryPurger())
