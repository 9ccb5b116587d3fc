"""Admin key guard for journal maintenance endpoints (cache control).

Analytics routes are open: they only transform the trades posted to them.
Routes that change server state need the configured key in X-API-Key,
except in development with no key set.
"""

import logging
import secrets

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from app.config import settings

logger = logging.getLogger(__name__)

ADMIN_KEY_HEADER = "X-API-Key"
DEV_BYPASS = "dev-bypass"

_admin_key_header = APIKeyHeader(name=ADMIN_KEY_HEADER, auto_error=False)


def check_admin_key(presented: str | None) -> str:
    """Validate a presented key against settings. Raises HTTPException on failure."""
    configured = settings.api_key
    if not configured:
        if settings.app_env == "development":
            return DEV_BYPASS
        logger.warning("Admin key not configured (app_env=%s), refusing maintenance call", settings.app_env)
        raise HTTPException(status_code=403, detail="Admin key not configured on server")

    if not presented or not secrets.compare_digest(presented, configured):
        logger.warning("Rejected maintenance call with %s admin key", "bad" if presented else "missing")
        raise HTTPException(status_code=401, detail=f"Invalid or missing {ADMIN_KEY_HEADER}")

    return presented


async def require_admin_key(api_key: str | None = Security(_admin_key_header)) -> str:
    """FastAPI dependency wrapping check_admin_key."""
    return check_admin_key(api_key)
