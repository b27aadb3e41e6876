"""Core Layer — domain types, error taxonomy, merge decision. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/, or db/
    - merge_outcome.py is pure and deterministic; errors.py only reads the
      clock to timestamp ErrorContext

Design Decisions:
    - Functional core separated from imperative shell; the shell (services/)
      orchestrates the async repository calls around these pure pieces
"""
