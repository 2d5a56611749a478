import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, Security
from fastapi.security.api_key import APIKeyHeader
from starlette.status import HTTP_403_FORBIDDEN

from blog_content.settings import Settings, settings

logger = logging.getLogger(__name__)

PREVIEW_KEY_HEADER = "X-Preview-Key"
preview_key_header = APIKeyHeader(name=PREVIEW_KEY_HEADER, auto_error=False)


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def is_preview_key_valid(presented: Optional[str], expected: str) -> bool:
    """
    Drafts are served through the preview API, so an unset PREVIEW_API_KEY
    locks it instead of letting any (or no) header through.
    """
    if not expected or not presented:
        return False
    return secrets.compare_digest(presented.encode(), expected.encode())


def require_preview_key(
    presented: Optional[str] = Security(preview_key_header),
    current_settings: Settings = Depends(get_settings),
) -> str:
    if not current_settings.PREVIEW_API_KEY:
        logger.warning("PREVIEW_API_KEY is not set; refusing preview request")
    if is_preview_key_valid(presented, current_settings.PREVIEW_API_KEY):
        return presented
    raise HTTPException(
        status_code=HTTP_403_FORBIDDEN,
        detail="Invalid or missing preview key",
    )
