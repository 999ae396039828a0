"""Infrastructure Layer — database sessions, SQL repositories, logging.

Invariants:
    - All SQLAlchemy failures surface as core.errors.DatabaseError
"""
