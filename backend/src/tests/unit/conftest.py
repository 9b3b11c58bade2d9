"""
Shared pytest fixtures and path setup for unit tests.
"""

import os
import sys
from pathlib import Path

# Test-only defaults, set BEFORE any teamsbot imports so Settings picks them up.
os.environ.setdefault("TEAMSBOT_ENVIRONMENT", "development")
os.environ.setdefault("TEAMSBOT_LOG_LEVEL", "DEBUG")
os.environ.setdefault("TEAMSBOT_PRELOAD_STORE", "false")

# Add backend/src to sys.path so teamsbot.* imports work when running pytest from repo root.
PROJECT_SRC = Path(__file__).resolve().parents[2]
if str(PROJECT_SRC) not in sys.path:
    sys.path.insert(0, str(PROJECT_SRC))

import pytest

from teamsbot.extension.actions import default_registry
from teamsbot.extension.handler import MessagingExtensionHandler
from teamsbot.services.record_store import InMemoryDataSource, RecordStore

PLACEHOLDER_IMAGE_URL = "https://example.com/placeholder.jpg"

IRON_MAN = {
    "name": "Iron Man",
    "actor": "Robert Downey Jr.",
    "realname": "Tony Stark",
    "image": "",
    "link": "https://x/ironman",
}


@pytest.fixture
def iron_man_document():
    """Single-record document used by the query/selection scenarios."""
    return {"characters": [dict(IRON_MAN)]}


@pytest.fixture
def avengers_document():
    """A few records in a fixed order, some with images."""
    return {
        "characters": [
            dict(IRON_MAN),
            {
                "name": "Iron Monger",
                "actor": "Jeff Bridges",
                "realname": "Obadiah Stane",
                "image": "https://x/monger.png",
                "link": "https://x/monger",
            },
            {
                "name": "Thor",
                "actor": "Chris Hemsworth",
                "realname": "Thor Odinson",
                "image": "https://x/thor.png",
                "link": "https://x/thor",
            },
            {
                "name": "Vision",
                "actor": "Paul Bettany",
                "realname": "Vision",
                "link": "https://x/vision",
            },
        ]
    }


@pytest.fixture
def make_handler():
    """Build a MessagingExtensionHandler over an in-memory document."""

    def _make(document) -> MessagingExtensionHandler:
        store = RecordStore(InMemoryDataSource(document))
        return MessagingExtensionHandler(store, default_registry(PLACEHOLDER_IMAGE_URL))

    return _make
