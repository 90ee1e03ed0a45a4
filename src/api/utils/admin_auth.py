"""
Admin API Key Authentication

Validates admin API keys for system administration endpoints.
"""

from fastapi import Header, Request, status
from libs.result import Error
from src.api.error import ClientError


async def verify_admin_api_key(request: Request, x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Used for tenant provisioning and suspension by internal services.
    Different from user sessions - this is service-to-service auth.

    Args:
        x_admin_api_key: API key from X-Admin-API-Key header

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    valid_admin_key = request.app.state.config.ADMIN_API_KEY

    if x_admin_api_key != valid_admin_key:
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
