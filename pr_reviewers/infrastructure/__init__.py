"""Infrastructure Layer — database engine, transaction scopes, repositories, logging.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - SQLAlchemy errors never cross into the workflow unmapped at commit time

Design Decisions:
    - One module per repository: each owns its ORM ↔ record conversion
"""
