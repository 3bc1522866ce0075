import logging
from datetime import datetime, timedelta

from jose import jwt
from jose.exceptions import JWTError, ExpiredSignatureError
from fastapi import Request, HTTPException, status
from friends_api import config

settings = config.get_settings()
log = logging.getLogger(__name__)


def create_access_token(user_id: int) -> str:
    """Issue an access token for user_id in the format get_current_user_id accepts."""
    now = datetime.now()
    payload = {
        "iss": "friends-api",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)).timestamp()),
        "typ": "access",
        "sub": str(user_id),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


async def get_current_user_id(request: Request) -> int:
    """
    Extract and validate JWT token from Authorization header.
    Returns the user ID from the token's 'sub' claim.

    This is used as a dependency in protected routes.
    """
    auth = request.headers.get("authorization")
    if not auth or not auth.lower().startswith("bearer "):
        log.warning("Missing bearer token for %s", request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token"
        )

    token = auth.split(" ", 1)[1].strip()

    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_iat": False}  # Clock skew between issuer and API
        )

        if payload.get("typ") != "access":
            log.warning("Invalid token type: %s", payload.get("typ"))
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token type"
            )

        sub = payload.get("sub")
        if sub is None:
            log.warning("No 'sub' claim in token")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token (no sub)"
            )

        user_id = int(sub)
        if user_id <= 0:
            raise ValueError(f"non-positive sub {user_id}")
        return user_id

    except ExpiredSignatureError:
        log.warning("Token expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired"
        )
    except (JWTError, ValueError) as e:
        log.warning("Invalid token - %s: %s", type(e).__name__, e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
