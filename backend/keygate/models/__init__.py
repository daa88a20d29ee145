# keygate/models/__init__.py
"""
Database models module initialization.

Models exported:
- Record: One node of the path-addressable record store
"""
from .record import Record
