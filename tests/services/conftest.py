"""Service test fixtures — in-memory harness for the merge workflow.

Invariants:
    - Every test gets a fresh FakeStore and fresh fakes
    - No database: workflow semantics are tested against the Protocols only
"""

import pytest

from tests.services.fakes import Harness


@pytest.fixture
def harness():
    return Harness()


@pytest.fixture
def seeded(harness):
    """One OPEN pull request with two reviewers."""
    return harness.seed()
