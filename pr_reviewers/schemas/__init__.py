"""API Schemas — Pydantic request/response models for the HTTP boundary.

Invariants:
    - Schemas never import ORM models; they are built from core results
"""
