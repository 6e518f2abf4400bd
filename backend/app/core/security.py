"""
Security utilities: password hashing, access tokens and federated identity tokens.
"""

import uuid
import bcrypt
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import jwt

from app.config import settings

# bcrypt is used directly; passlib breaks on bcrypt 5.x

# JWT configuration
ALGORITHM = "HS256"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """Generate a password hash."""
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a new JWT access token with a unique ``jti``."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire, "jti": uuid.uuid4().hex})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and verify an access token. Raises ``JWTError`` when invalid."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])


def verify_federated_token(id_token: str) -> Dict[str, Any]:
    """
    Verify an identity token issued by the federated sign-in provider.

    Raises ``JWTError`` when the signature, expiry or audience is wrong.
    """
    options = {"verify_aud": settings.FEDERATED_JWT_AUDIENCE is not None}
    return jwt.decode(
        id_token,
        settings.FEDERATED_JWT_KEY,
        algorithms=settings.FEDERATED_JWT_ALGORITHMS,
        audience=settings.FEDERATED_JWT_AUDIENCE,
        options=options,
    )
