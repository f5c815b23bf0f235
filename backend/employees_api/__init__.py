"""
Employees API — Application Package
=====================================

A thin REST layer over the Employees table.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (request → SQL)        │  ← one statement per call
    ├─────────────────────────────────────┤
    │     Schemas (Pydantic contracts)    │  ← boundary validation
    ├─────────────────────────────────────┤
    │    Database (pooled connections)    │  ← async SQLAlchemy + asyncpg
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
