# keygate/core/errors.py
"""
Error taxonomy for key validation.

Every rejection raised by the validator is a KeyGateError subclass carrying
the HTTP status and the message shown to the caller. The HTTP layer renders
them as {"success": false, "message": ...} without further translation.
"""
from typing import Optional


class KeyGateError(Exception):
    """Base class for all errors surfaced to a key holder."""

    code: str = "KEYGATE_ERROR"
    status_code: int = 500
    message: str = "Server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_response(self) -> dict:
        """Body returned to the client for this error."""
        return {"success": False, "message": self.message}


class InvalidRequest(KeyGateError):
    code = "INVALID_REQUEST"
    status_code = 400
    message = "Key and HWID are required"


class KeyNotFound(KeyGateError):
    code = "KEY_NOT_FOUND"
    status_code = 404
    message = "Invalid key"


class KeyBanned(KeyGateError):
    code = "KEY_BANNED"
    status_code = 403
    message = "Key is banned"


class KeyPaused(KeyGateError):
    code = "KEY_PAUSED"
    status_code = 403
    message = "Key is paused"


class ApplicationMismatch(KeyGateError):
    code = "APPLICATION_MISMATCH"
    status_code = 403

    def __init__(self, key_app: str, requested_app: str, prefix: str = "Login failed"):
        self.key_app = key_app
        self.requested_app = requested_app
        super().__init__(f"{prefix}: This key is for {key_app} application, not {requested_app}")


class ApplicationNotFound(KeyGateError):
    code = "APPLICATION_NOT_FOUND"
    status_code = 404
    message = "Application not found"


class ApplicationDisabled(KeyGateError):
    code = "APPLICATION_DISABLED"
    status_code = 403
    message = "Application is currently disabled"


class HwidMismatch(KeyGateError):
    code = "HWID_MISMATCH"
    status_code = 403
    message = "HWID mismatch. This key is bound to another device."


class KeyExpired(KeyGateError):
    code = "KEY_EXPIRED"
    status_code = 403
    message = "Key has expired"


class KeyNotActivated(KeyGateError):
    code = "KEY_NOT_ACTIVATED"
    status_code = 403
    message = "Key not activated"


class StoreError(KeyGateError):
    """Unexpected failure of the record store. Details stay in the server log."""

    code = "STORE_ERROR"
    status_code = 500
    message = "Server error"
