"""
Test configuration and fixtures for forensic-dna tests.
"""

import logging

import pytest

from forensic_dna.profile import Profile
from forensic_dna.tree import ProfileStore


SAMPLE_DATABASE = """AGATAGATCC
TTAGAT
3
Amy Smith 2 AGAT 3 CC 1
Bob Doe 2
AGAT 2 TT 5
Carl Zane 1 GATA 0
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo any handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger("forensic_dna")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def sample_text():
    return SAMPLE_DATABASE


@pytest.fixture
def database_file(tmp_path):
    """Sample database written to disk."""
    path = tmp_path / "people.txt"
    path.write_text(SAMPLE_DATABASE, encoding="utf-8")
    return path


@pytest.fixture
def level_order_store():
    """Store built from the level-order example, every profile unmarked."""
    return build_tree(["Smith, Amy", "Doe, Bob", "Zane, Carl", "Ames, Dot"])


# Utility functions for tests
def build_tree(names, first_evidence="", second_evidence="", **kwargs):
    """Insert ``names`` in order, each with an empty profile."""
    store = ProfileStore(first_evidence, second_evidence, **kwargs)
    for name in names:
        store.insert(name, Profile())
    return store


def collect_names(node):
    """Every name reachable from ``node``, visiting each node once."""
    if node is None:
        return []
    return [node.name] + collect_names(node.left) + collect_names(node.right)
