"""ORM Models — SQLAlchemy declarative models for pull requests, statuses, reviewers.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM objects never leave the repositories; they are converted to records

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all
      and alembic autogenerate
"""

from pr_reviewers.models.pr_status import PRStatus  # noqa: F401
from pr_reviewers.models.pull_request import PullRequest  # noqa: F401
from pr_reviewers.models.pr_reviewer import PRReviewer  # noqa: F401
