# keygate/api/v1/deps.py
from fastapi import Depends
from keygate.config import settings
from keygate.services.key_validator import Clock, KeyValidator, current_millis
from keygate.services.record_store import RecordStore
from keygate.services.store_factory import get_record_store

def get_clock() -> Clock:
    """
    FastAPI dependency providing the time source used for activation and expiry.

    Tests override this through `app.dependency_overrides` to pin "now".
    """
    return current_millis

def get_key_validator(
    store: RecordStore = Depends(get_record_store),
    clock: Clock = Depends(get_clock),
) -> KeyValidator:
    """
    FastAPI dependency building a KeyValidator per request.

    The record store and clock are injected, so no module level state is
    shared between requests apart from the database connection itself.

    Usage:
        @router.post("/auth")
        async def auth(body: KeyCheckIn, validator: KeyValidator = Depends(get_key_validator)):
            ...
    """
    return KeyValidator(
        store,
        clock=clock,
        keys_path=settings.keys_path,
        applications_path=settings.applications_path,
        default_app_name=settings.default_app_name,
    )
