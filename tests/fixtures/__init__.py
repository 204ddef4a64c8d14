"""Test fixtures for DigestTrack."""

from tests.fixtures.fakes import FailingDerivedStore, InMemoryStore
from tests.fixtures.mocks import MockIngredientDetector

__all__ = [
    "FailingDerivedStore",
    "InMemoryStore",
    "MockIngredientDetector",
]
