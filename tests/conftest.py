"""
Pytest configuration and fixtures.
"""

import logging
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest."""
    # Add src and tests to path
    root = Path(__file__).parent.parent
    sys.path.insert(0, str(root / "src"))
    sys.path.insert(0, str(Path(__file__).parent))
    config.addinivalue_line("markers", "timing: test depends on real sleeps")


def pytest_collection_modifyitems(config, items):
    """
    Modify test items to add helpful markers.
    """
    for item in items:
        if "scenario" in item.nodeid.lower() or "timing" in item.nodeid.lower():
            item.add_marker("timing")


@pytest.fixture(autouse=True)
def restore_spacer_logger():
    """Undo logging changes made by the CLI so caplog keeps working."""
    logger = logging.getLogger("spacer")
    handlers = list(logger.handlers)
    propagate = logger.propagate
    level = logger.level
    yield
    logger.handlers = handlers
    logger.propagate = propagate
    logger.setLevel(level)
