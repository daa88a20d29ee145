# keygate/schemas/records.py
"""
Pydantic models for records read from the record store.
Records are written by the administrative side, so unknown fields are kept
and missing flags fall back to their restrictive defaults.
"""
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict

__all__ = ["KeyRecord", "ApplicationRecord"]

DEFAULT_USERNAME = "User"


class KeyRecord(BaseModel):
    """
    One issued license key, stored at keys/<id>.
    Timestamps are epoch milliseconds.
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None  # Lookup key (path segment), filled in by the reader
    username: Optional[str] = None  # Display name; "User" when unset
    type: Any = None  # Duration class (lifetime, month, week, 3day, day, second, "<N> days"); anything else is one day
    application: Optional[str] = None  # Application scope; "default" when unset
    isBanned: bool = False
    isActive: bool = False  # Missing flag counts as paused
    hwid: Any = None  # Bound hardware id, set on first validation
    activated: bool = False
    activatedAt: Optional[Union[int, float]] = None
    expiresAt: Optional[Union[int, float]] = None
    lastUsed: Optional[Union[int, float]] = None

    @property
    def display_name(self) -> str:
        return self.username or DEFAULT_USERNAME

    def scoped_application(self, default: str) -> str:
        """Application this key is bound to."""
        return self.application or default


class ApplicationRecord(BaseModel):
    """
    Named application (tenant), stored at applications/<name>.
    When inactive, every key scoped to it is rejected.
    """
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    isActive: bool = False
