"""Authentication service for JWT, password handling and request identity."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError, jwt
from passlib.context import CryptContext

from blog_api.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)


@dataclass(frozen=True)
class Identity:
    """Who is making the current request."""

    is_authenticated: bool = False
    user_id: str | None = None


ANONYMOUS = Identity()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int | str, email: str) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def verify_authorization_header(authorization: str | None) -> Identity:
    """Turn a raw ``Authorization`` header into an identity.

    Never raises: a missing, malformed, forged or expired credential yields
    the anonymous identity and each resolver decides whether that is enough.
    """
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token:
        return ANONYMOUS

    payload = decode_access_token(token)
    if payload is None:
        logger.debug("Rejected bearer token, continuing as anonymous")
        return ANONYMOUS

    user_id = payload.get("sub")
    if user_id is None:
        return ANONYMOUS

    return Identity(is_authenticated=True, user_id=str(user_id))
