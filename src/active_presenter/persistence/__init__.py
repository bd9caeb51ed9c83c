# ABOUTME: Database operations and data persistence layer
# ABOUTME: Concrete transaction manager and record base used by presenters

"""
Persistence Layer: Save presented entities inside one transaction

This layer handles:
- SQLModel engine, session and transaction management
- The session-per-transaction context presented records join
- A Record base class that satisfies the presentable-entity contract

Data Flow: presenter/ save coordination → Records → Database
"""

from .database import DatabaseManager, current_session, get_database, set_database
from .record import Record

__all__ = [
    "DatabaseManager",
    "Record",
    "current_session",
    "get_database",
    "set_database",
]
