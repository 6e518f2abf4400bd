"""
Shared API dependencies.
"""

from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.admin_service import admin_service
from app.services.auth_service import auth_service
from app.services.storage_service import LocalImageStorage, get_storage
from app.core import security
from app.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


def _decode(db: Session, token: str) -> Dict[str, Any]:
    try:
        payload = security.decode_access_token(token)
    except JWTError:
        raise credentials_exception
    jti = payload.get("jti")
    if not jti or auth_service.is_token_revoked(db, jti):
        raise credentials_exception
    return payload


def _user_from_payload(db: Session, payload: Dict[str, Any]) -> User:
    user_id = payload.get("user_id")
    if user_id is None:
        raise credentials_exception
    user = auth_service.get_user_by_id(db, user_id=user_id)
    if user is None:
        raise credentials_exception
    if not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return user


async def get_token_payload(
    db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)
) -> Dict[str, Any]:
    return _decode(db, token)


async def get_current_user(
    db: Session = Depends(get_db),
    payload: Dict[str, Any] = Depends(get_token_payload),
) -> User:
    """
    Validate access token and return current user.
    """
    return _user_from_payload(db, payload)


async def get_optional_user(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(optional_oauth2_scheme),
) -> Optional[User]:
    """Current user, or None for anonymous requests and invalid tokens."""
    if not token:
        return None
    try:
        return _user_from_payload(db, _decode(db, token))
    except HTTPException:
        return None


async def require_admin(
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
) -> User:
    if not admin_service.is_admin(db, current_user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return current_user


def get_image_storage() -> LocalImageStorage:
    return get_storage()
