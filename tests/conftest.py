"""Shared fixtures for anagrove tests."""

import pytest

import anagrove
from anagrove import AnagramEngine, DictionaryIndex

# A tiny ranked dictionary with hand-checkable results for the seed "listen".
SMALL_WORDS = [
    "silent", "listen", "enlist", "lines", "list", "lets", "ten", "net",
    "tin", "sin", "lie", "t", "nil", "lit", "its", "sit",
]


@pytest.fixture(scope="session")
def engine():
    """Load the bundled dictionary once for all tests."""
    return anagrove.load()


@pytest.fixture
def small_index():
    return DictionaryIndex.from_pairs(
        (word, rank) for rank, word in enumerate(SMALL_WORDS, 1)
    )


@pytest.fixture
def small_engine(small_index):
    return AnagramEngine(small_index)


def make_engine(*words):
    """Engine over ``words`` ranked in the order given."""
    return AnagramEngine(DictionaryIndex.from_pairs(
        (word, rank) for rank, word in enumerate(words, 1)
    ))
