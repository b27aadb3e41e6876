"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services talk to persistence only through core/repository_protocols.py
    - One workflow per module

Design Decisions:
    - Workflows receive their repositories and transaction manager in __init__:
      routes wire the SQLAlchemy implementations, tests wire fakes
"""
