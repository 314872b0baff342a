"""
Database Module
-------------
Handles database connections, ORM models, and the camp/course stores.
Uses SQLAlchemy and wires the lifecycle hooks (enrichment, aggregate recompute, cascading delete) explicitly.
"""
