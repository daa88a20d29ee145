"""
Services Module

Provides the key validation core and its collaborators:
- Record store: path-addressable key-value tree (Tortoise ORM backed)
- Durations: key type to lifetime mapping
- KeyValidator: validate / heartbeat state machine
"""

# Record store
from .record_store import (
    RecordStore,
    TortoiseRecordStore,
    is_valid_segment,
    join_path,
)
from .store_factory import get_record_store

# Key durations
from .durations import (
    DAY_MS,
    KeyDuration,
    KeyType,
    duration_millis,
    parse_key_type,
)

# Validation
from .key_validator import (
    KeyValidator,
    ValidationResult,
    current_millis,
)

__all__ = [
    # Record store
    "RecordStore",
    "TortoiseRecordStore",
    "is_valid_segment",
    "join_path",
    "get_record_store",
    # Durations
    "DAY_MS",
    "KeyDuration",
    "KeyType",
    "duration_millis",
    "parse_key_type",
    # Validation
    "KeyValidator",
    "ValidationResult",
    "current_millis",
]
