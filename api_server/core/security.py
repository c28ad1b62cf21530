# api_server/core/security.py
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security.api_key import APIKeyHeader

API_KEY_NAME = "X-API-Key" # Custom header name for clients to send the key

# auto_error=False allows us to give custom messages for missing vs. invalid
api_key_header_auth = APIKeyHeader(name=API_KEY_NAME, auto_error=False)


async def get_api_key(request: Request, api_key_header: Optional[str] = Security(api_key_header_auth)):
    """
    Dependency to validate the API key from the X-API-Key header against the
    key loaded into app.state.settings at startup (SERVER_API_KEY).
    """
    if api_key_header is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated: X-API-Key header missing.",
        )
    expected_key = request.app.state.settings.api_key
    if secrets.compare_digest(api_key_header.encode(), expected_key.encode()):
        return api_key_header
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid API Key.",
    )


async def verify_api_key(api_key: str = Depends(get_api_key)):
    """Route-level guard; get_api_key raises if authentication fails."""
    return True
