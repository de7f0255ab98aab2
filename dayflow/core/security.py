# dayflow/core/security.py
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from dayflow.core.config import settings, get_db
from dayflow.crud.user import crud_user
from dayflow.models.user import User


# =====================================================================
# JWT TOKEN CONFIGURATION
# =====================================================================

security = HTTPBearer()


# =====================================================================
# TOKEN CREATION
# =====================================================================

def _encode(data: dict, secret_key: str, token_type: str, expires: timedelta) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires
    to_encode.update({"exp": expire, "type": token_type})
    return jwt.encode(to_encode, secret_key, algorithm=settings.ALGORITHM)


def create_access_token(data: dict) -> str:
    """
    Create JWT access token.

    Args:
        data: Dictionary containing user data (typically {"sub": user_id})

    Returns:
        Encoded JWT access token
    """
    return _encode(
        data,
        settings.SECRET_KEY,
        "access",
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(data: dict) -> str:
    """
    Create JWT refresh token.

    Args:
        data: Dictionary containing user data (typically {"sub": user_id})

    Returns:
        Encoded JWT refresh token
    """
    return _encode(
        data,
        settings.REFRESH_SECRET_KEY,
        "refresh",
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def create_reset_token(user_id: UUID, password_hash: str) -> str:
    """
    Create a short-lived password reset token.

    The tail of the current password hash is embedded so the token stops
    working as soon as the password changes.
    """
    return _encode(
        {"sub": str(user_id), "pwd": password_hash[-12:]},
        settings.SECRET_KEY,
        "reset",
        timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES),
    )


def create_oauth_state(user_id: UUID) -> str:
    """Signed OAuth ``state`` carrying the user id through the Google redirect."""
    return _encode(
        {"sub": str(user_id)},
        settings.SECRET_KEY,
        "oauth_state",
        timedelta(minutes=settings.OAUTH_STATE_EXPIRE_MINUTES),
    )


# =====================================================================
# TOKEN VERIFICATION
# =====================================================================

def decode_token(token: str, secret_key: str, token_type: str = "access") -> dict:
    """
    Verify JWT token and return its payload.

    Args:
        token: JWT token string
        secret_key: Secret key for decoding
        token_type: Type of token ("access", "refresh", "reset", "oauth_state")

    Returns:
        Decoded payload (always contains "sub")

    Raises:
        HTTPException: If token is invalid or expired
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, secret_key, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise credentials_exception

    if payload.get("sub") is None:
        raise credentials_exception

    if payload.get("type") != token_type:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token type. Expected {token_type}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload


def verify_token(token: str, secret_key: str, token_type: str = "access") -> str:
    """Verify JWT token and return user_id."""
    return decode_token(token, secret_key, token_type)["sub"]


def verify_access_token(token: str) -> str:
    return verify_token(token, settings.SECRET_KEY, "access")


def verify_refresh_token(token: str) -> str:
    return verify_token(token, settings.REFRESH_SECRET_KEY, "refresh")


def verify_oauth_state(state: str) -> str:
    return verify_token(state, settings.SECRET_KEY, "oauth_state")


def parse_user_id(user_id: str) -> UUID:
    try:
        return UUID(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


# =====================================================================
# USER AUTHENTICATION DEPENDENCIES
# =====================================================================

async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer credentials containing JWT token
        db: Database session

    Returns:
        Current authenticated User instance

    Raises:
        HTTPException: If token is invalid or user not found
    """
    user_id = verify_access_token(credentials.credentials)

    user = crud_user.get(db, id=parse_user_id(user_id))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user

