"""Root conftest — shared test configuration and SQLite fixtures.

Invariants:
    - Every test using test_engine gets a fresh in-memory SQLite database
    - transactions is the production SqlAlchemyTransactionManager over that database

Design Decisions:
    - SQLite in-memory: fast, no external dependency; row locks are no-ops there,
      so overlapping merges are exercised on a file database in
      tests/infrastructure/test_concurrent_merge.py
"""

import os

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

from datetime import datetime, timezone  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from pr_reviewers.core.domain_types import (  # noqa: E402
    PullRequestId, StatusId, ReviewerId, UserId,
    PullRequestRecord, StatusRecord, ReviewerRecord,
)
from pr_reviewers.db.base import Base  # noqa: E402
import pr_reviewers.models  # noqa: E402,F401
from pr_reviewers.infrastructure.pull_request_repository import (  # noqa: E402
    SqlAlchemyPullRequestRepository,
)
from pr_reviewers.infrastructure.reviewer_repository import (  # noqa: E402
    SqlAlchemyReviewerRepository,
)
from pr_reviewers.infrastructure.status_repository import (  # noqa: E402
    SqlAlchemyStatusRepository,
)
from pr_reviewers.infrastructure.transaction import (  # noqa: E402
    SqlAlchemyTransactionManager,
)

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def transactions(test_session_factory):
    return SqlAlchemyTransactionManager(test_session_factory)


@pytest.fixture
def pr_repo():
    return SqlAlchemyPullRequestRepository(clock=lambda: FIXED_NOW)


@pytest.fixture
def status_repo():
    return SqlAlchemyStatusRepository()


@pytest.fixture
def reviewer_repo():
    return SqlAlchemyReviewerRepository()


@pytest.fixture
def seed_pull_request(transactions, pr_repo, status_repo, reviewer_repo):
    """Factory: insert status + pull request + reviewers, return their ids."""

    async def _seed(status: str = "OPEN", reviewers: int = 2, merged_at=None):
        status_id = StatusId(uuid4())
        pr_id = PullRequestId(uuid4())
        reviewer_ids = [ReviewerId(uuid4()) for _ in range(reviewers)]
        async with transactions.transaction() as tx:
            await status_repo.save(tx, StatusRecord(id=status_id, status=status))
            await pr_repo.save(tx, PullRequestRecord(
                id=pr_id, name="Fix flaky merge test", author_id=UserId(uuid4()),
                status_id=status_id,
                created_at=datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc),
                merged_at=merged_at,
            ))
            for reviewer_id in reviewer_ids:
                await reviewer_repo.save(tx, ReviewerRecord(
                    id=uuid4(), pr_id=pr_id, reviewer_id=reviewer_id,
                ))
        return {"pr_id": pr_id, "status_id": status_id, "reviewer_ids": reviewer_ids}

    return _seed
