"""
Record Store Factory

Uses the Tortoise ORM database configured in keygate.core.db
"""
from .record_store import RecordStore, TortoiseRecordStore


def get_record_store() -> RecordStore:
    """
    Get record store

    Returns:
    - RecordStore: Tortoise backed store instance

    Note:
    - Tortoise must be initialized first (init_db on startup)
    """
    return TortoiseRecordStore()
