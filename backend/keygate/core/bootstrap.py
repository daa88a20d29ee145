# keygate/core/bootstrap.py
"""
Bootstrap module for application initialization.
Handles initial setup tasks such as creating the default application record on first startup.
"""
import logging
from keygate.config import settings
from keygate.services.record_store import RecordStore, join_path

logger = logging.getLogger("uvicorn.error")

async def ensure_default_application(store: RecordStore) -> None:
    """
    If the default application record is missing, create it as active.
    Only takes effect under the following conditions:
      - BOOTSTRAP_DEFAULT_APP is enabled
      - And applications/<DEFAULT_APP_NAME> does not exist yet
    Keys without an `application` field are scoped to this record, so
    without it every such key is rejected with "Application not found".
    """
    if not settings.bootstrap_default_app:
        logger.info("[bootstrap] BOOTSTRAP_DEFAULT_APP not set -> skip default application check.")
        return

    path = join_path(settings.applications_path, settings.default_app_name)
    if await store.exists(path):
        return  # Never touch an existing record (it may be disabled on purpose)

    await store.update(path, {"name": settings.default_app_name, "isActive": True})
    logger.warning("[bootstrap] Created default application -> path=%s", path)
