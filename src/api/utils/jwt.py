from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt


def create_dev_session_token(
    payload: dict, secret: str, expires_delta: timedelta
) -> str:
    """
    Sign a development session cookie

    Args:
        payload: Identity claims (user_id, email, role, tenant_id, team_id)
        secret: HS256 signing secret
        expires_delta: Cookie lifetime

    Returns:
        JWT token string (HS256) carrying an explicit exp epoch and is_dev=True
    """
    now = datetime.now(UTC)
    claims = dict(payload)
    claims.update(
        {
            "is_dev": True,
            "exp": int((now + expires_delta).timestamp()),
            "iat": int(now.timestamp()),
        }
    )
    return jwt.encode(claims, secret, algorithm="HS256")


def verify_dev_session_token(token: str, secret: str) -> Optional[dict]:
    """
    Verify and decode a development session cookie

    Args:
        token: JWT token string
        secret: HS256 signing secret

    Returns:
        Decoded payload dict or None if invalid, forged or expired
    """
    try:
        payload = jwt.decode(token, secret, algorithms=["HS256"])
    except JWTError:
        return None
    if payload.get("is_dev") is not True or "exp" not in payload:
        return None
    return payload
