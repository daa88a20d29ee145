# keygate/schemas/keys.py
"""
Pydantic schemas for the key check endpoints.
Defines request/response models for /auth and /heartbeat.
"""
from typing import Any, Optional, Union
from pydantic import BaseModel

__all__ = ["KeyCheckIn", "AuthOut", "HeartbeatOut", "ErrorOut"]


class KeyCheckIn(BaseModel):
    """
    Request body shared by /auth and /heartbeat.
    Fields are optional here so that missing values are reported as
    InvalidRequest by the validator instead of a schema error.
    """
    key: Optional[str] = None  # License key (record id)
    hwid: Optional[str] = None  # Hardware identifier of the calling device
    appName: Optional[str] = None  # Application name; "default" when omitted


class AuthOut(BaseModel):
    """Successful /auth response."""
    success: bool = True
    message: str = "Authentication successful"
    username: str
    keyType: Any = None  # Raw `type` field of the key record
    expiresAt: Optional[Union[int, float]] = None  # Epoch milliseconds


class HeartbeatOut(BaseModel):
    """Successful /heartbeat response (bare acknowledgement)."""
    success: bool = True


class ErrorOut(BaseModel):
    """Body of every rejected request."""
    success: bool = False
    message: str
