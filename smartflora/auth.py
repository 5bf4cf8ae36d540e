"""
Session token module for SmartFlora.

Anonymous sessions carry a JWT so that the presentation layer has a
bearer credential to hold on to. Tokens are signed but the mock backend
does not enforce them; they identify the session they were minted for.

decode_token() and TokenData are for inspecting a token, e.g. to read
back which anonymous id it was issued to. No route requires them.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

# Configuration
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
ALGORITHM = "HS256"

SESSION_TOKEN_TYPE = "session"
SESSION_TOKEN_EXPIRE_DAYS = int(os.getenv("SESSION_TOKEN_EXPIRE_DAYS", "30"))


class TokenData(BaseModel):
    """Decoded token data."""

    subject_id: str
    token_type: str
    expires_at: datetime
    issued_at: datetime


def create_session_token(
    anonymous_id: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT for an anonymous session.

    Args:
        anonymous_id: The session's anonymous id, stored as the subject
        expires_delta: Custom expiration time (default SESSION_TOKEN_EXPIRE_DAYS)

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(days=SESSION_TOKEN_EXPIRE_DAYS)

    now = datetime.now(timezone.utc)

    to_encode = {
        "sub": anonymous_id,
        "type": SESSION_TOKEN_TYPE,
        "exp": now + expires_delta,
        "iat": now,
    }

    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[TokenData]:
    """
    Decode and validate a JWT token.

    Returns:
        TokenData if valid, None if invalid or expired
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])

        return TokenData(
            subject_id=payload.get("sub", ""),
            token_type=payload.get("type", ""),
            expires_at=datetime.fromtimestamp(payload.get("exp", 0), tz=timezone.utc),
            issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
        )
    except JWTError:
        return None
