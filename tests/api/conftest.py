"""API test fixtures — FastAPI test client over the in-memory SQLite database.

Invariants:
    - get_transaction_manager overridden: routes use the real repositories on test_engine
    - Overrides cleared after each test

Design Decisions:
    - httpx ASGITransport does not run lifespan, so init_db is never called here
"""

import pytest
from httpx import ASGITransport, AsyncClient

from pr_reviewers.infrastructure.database import get_transaction_manager
from pr_reviewers.main import app


@pytest.fixture
async def client(transactions):
    app.dependency_overrides[get_transaction_manager] = lambda: transactions

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
