"""
Confession Board — Application Package
=======================================

Layered the usual way:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (one SQL statement     │  ← per operation)
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy pool
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
