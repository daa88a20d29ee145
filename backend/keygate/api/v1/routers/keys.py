# keygate/api/v1/routers/keys.py
from fastapi import APIRouter, Depends
from keygate.api.v1.deps import get_key_validator
from keygate.schemas.keys import AuthOut, ErrorOut, HeartbeatOut, KeyCheckIn
from keygate.services.key_validator import KeyValidator

router = APIRouter(tags=["keys"])

# Documented failure bodies; KeyGateError handlers in keygate.main render them
_ERROR_RESPONSES = {code: {"model": ErrorOut} for code in (400, 403, 404, 500)}

@router.post("/auth", response_model=AuthOut, responses=_ERROR_RESPONSES)
async def authenticate(body: KeyCheckIn, validator: KeyValidator = Depends(get_key_validator)):
    """
    Validate a license key for a device.

    The first successful call binds the key to `hwid` and starts its expiry
    countdown; later calls must come from the same device and before
    `expiresAt`.

    Args:
        body: Request body containing:
            - key: str (license key)
            - hwid: str (hardware identifier)
            - appName: str | None (application name, "default" when omitted)
        validator: KeyValidator (from dependency)

    Returns:
        AuthOut: success, message, username, keyType, expiresAt (epoch ms)

    Error statuses:
        - 400: key or hwid missing
        - 404: unknown key or application
        - 403: banned, paused, application mismatch/disabled, HWID mismatch, expired
        - 500: record store failure
    """
    result = await validator.validate(body.key, body.hwid, body.appName)
    return AuthOut(
        username=result.username,
        keyType=result.key_type,
        expiresAt=result.expires_at,
    )

@router.post("/heartbeat", response_model=HeartbeatOut, responses=_ERROR_RESPONSES)
async def heartbeat(body: KeyCheckIn, validator: KeyValidator = Depends(get_key_validator)):
    """
    Keep an activated session alive.

    Runs the same checks as /auth but never activates a key; only `lastUsed`
    is updated. Unknown, banned and paused keys all answer "Session invalid".
    """
    await validator.heartbeat(body.key, body.hwid, body.appName)
    return HeartbeatOut()
