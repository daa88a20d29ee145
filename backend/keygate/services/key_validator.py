"""
Key validation and lifecycle.

KeyValidator answers two questions for a (key, hwid, application) triple:
- validate: may this device use the key? Binds the hwid and starts the
  expiry countdown the first time the key is used.
- heartbeat: is an already activated session still legitimate? Never
  activates a key.

Both share one guard chain; the first failing check raises its KeyGateError
and nothing is written to the store.
"""
import datetime as dt
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from pydantic import ValidationError

from keygate.core.errors import (
    ApplicationDisabled,
    ApplicationMismatch,
    ApplicationNotFound,
    HwidMismatch,
    InvalidRequest,
    KeyBanned,
    KeyExpired,
    KeyGateError,
    KeyNotActivated,
    KeyNotFound,
    KeyPaused,
    StoreError,
)
from keygate.schemas.records import ApplicationRecord, KeyRecord
from keygate.services.durations import parse_key_type
from keygate.services.record_store import RecordStore, is_valid_segment, join_path

logger = logging.getLogger("uvicorn.error")

Clock = Callable[[], int]

# Heartbeat replies carry less detail than /auth
SESSION_INVALID = "Session invalid"
HEARTBEAT_HWID_MISMATCH = "HWID mismatch"
HEARTBEAT_APP_DISABLED = "Application disabled"


def current_millis() -> int:
    """Current UTC time as epoch milliseconds."""
    return int(dt.datetime.now(dt.timezone.utc).timestamp() * 1000)


@dataclass
class ValidationResult:
    """Outcome of a successful validate call"""
    username: str
    key_type: Any
    expires_at: Optional[Union[int, float]]  # Epoch milliseconds
    activated_now: bool = False  # True when this call started the countdown


class KeyValidator:
    """Validate / heartbeat state machine over a RecordStore."""

    def __init__(
        self,
        store: RecordStore,
        clock: Clock = current_millis,
        keys_path: str = "keys",
        applications_path: str = "applications",
        default_app_name: str = "default",
    ):
        self.store = store
        self.clock = clock
        self.keys_path = keys_path
        self.applications_path = applications_path
        self.default_app_name = default_app_name

    # -------- public operations --------
    async def validate(self, key: Optional[str], hwid: Optional[str],
                       app_name: Optional[str] = None) -> ValidationResult:
        """
        Validate a key for a device, activating it on first use.

        Raises:
        - KeyGateError subclass for each rejected check, StoreError on store failure
        """
        try:
            now = self.clock()
            key_path, record = await self._guard(key, hwid, app_name, heartbeat=False)

            updates: Dict[str, Any] = {"lastUsed": now}
            if not record.hwid:
                updates["hwid"] = hwid

            expires_at = record.expiresAt
            if not record.activated:
                duration = parse_key_type(record.type)
                expires_at = now + duration.millis
                updates["activated"] = True
                updates["activatedAt"] = now
                updates["expiresAt"] = expires_at
            elif self._is_expired(record, now, "auth"):
                raise KeyExpired()

            await self._call_store("update", key_path, updates)
        except KeyGateError as exc:
            logger.info("[auth] key=%s rejected: %s", key, exc.code)
            raise

        activated_now = "activated" in updates
        if activated_now:
            logger.info("[auth] key=%s activated (type=%s, expiresAt=%s)", key, record.type, expires_at)
        return ValidationResult(
            username=record.display_name,
            key_type=record.type,
            expires_at=expires_at,
            activated_now=activated_now,
        )

    async def heartbeat(self, key: Optional[str], hwid: Optional[str],
                        app_name: Optional[str] = None) -> None:
        """
        Confirm an activated session is still valid and touch lastUsed.

        Raises:
        - KeyNotActivated if the key was never validated (heartbeat never activates)
        - KeyExpired, or any guard chain error with heartbeat wording
        """
        try:
            now = self.clock()
            key_path, record = await self._guard(key, hwid, app_name, heartbeat=True)

            if not record.activated:
                raise KeyNotActivated()
            if self._is_expired(record, now, "heartbeat"):
                raise KeyExpired()

            await self._call_store("update", key_path, {"lastUsed": now})
        except KeyGateError as exc:
            logger.info("[heartbeat] key=%s rejected: %s", key, exc.code)
            raise

    # -------- guard chain --------
    async def _guard(self, key: Any, hwid: Any, app_name: Optional[str],
                     heartbeat: bool) -> tuple[str, KeyRecord]:
        if not isinstance(key, str) or not isinstance(hwid, str) or not key or not hwid:
            raise InvalidRequest()
        app_name = app_name or self.default_app_name

        key_path = join_path(self.keys_path, key) if is_valid_segment(key) else None
        data = await self._call_store("get", key_path) if key_path else None
        if data is None:
            raise KeyNotFound(SESSION_INVALID, 403) if heartbeat else KeyNotFound()
        record = self._parse(KeyRecord, key_path, {**data, "id": key})

        if record.isBanned:
            raise KeyBanned(SESSION_INVALID) if heartbeat else KeyBanned()
        if not record.isActive:
            raise KeyPaused(SESSION_INVALID) if heartbeat else KeyPaused()

        key_app = record.scoped_application(self.default_app_name)
        if key_app != app_name:
            prefix = SESSION_INVALID if heartbeat else "Login failed"
            raise ApplicationMismatch(key_app, app_name, prefix=prefix)

        app_path = join_path(self.applications_path, app_name)
        app_data = await self._call_store("get", app_path)
        if app_data is None:
            if heartbeat:
                raise ApplicationNotFound(HEARTBEAT_APP_DISABLED, 403)
            raise ApplicationNotFound()
        application = self._parse(ApplicationRecord, app_path, app_data)
        if not application.isActive:
            raise ApplicationDisabled(HEARTBEAT_APP_DISABLED) if heartbeat else ApplicationDisabled()

        if record.hwid and record.hwid != hwid:
            raise HwidMismatch(HEARTBEAT_HWID_MISMATCH) if heartbeat else HwidMismatch()

        return key_path, record

    @staticmethod
    def _is_expired(record: KeyRecord, now: int, tag: str) -> bool:
        # An activated key without expiresAt never compares as expired
        if record.expiresAt is None:
            logger.warning("[%s] key=%s is activated but has no expiresAt", tag, record.id)
            return False
        return record.expiresAt < now

    # -------- store access --------
    async def _call_store(self, op: str, path: str, *args: Any) -> Any:
        try:
            return await getattr(self.store, op)(path, *args)
        except KeyGateError:
            raise
        except Exception as exc:
            logger.exception("[store] %s %s failed", op, path)
            raise StoreError() from exc

    @staticmethod
    def _parse(model, path: str, data: Any):
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.exception("[store] malformed record at %s", path)
            raise StoreError() from exc
