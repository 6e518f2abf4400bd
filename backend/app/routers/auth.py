"""
Authentication API endpoints.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.config import settings
from app.core.limiter import limiter
from app.database import get_db
from app.dependencies import get_current_user, get_optional_user, get_token_payload
from app.models.user import User
from app.schemas import FederatedSignIn, SessionResponse, Token, UserCreate, UserResponse
from app.services.admin_service import admin_service
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(user_in: UserCreate, db: Session = Depends(get_db)) -> Any:
    """
    Register a new user with email and password.
    """
    return auth_service.create_user(
        db=db,
        email=user_in.email,
        password=user_in.password,
        display_name=user_in.display_name,
    )


@router.post("/token", response_model=Token)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login_access_token(
    request: Request,
    db: Session = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> Any:
    """
    OAuth2 compatible token login, get an access token for future requests.
    """
    return auth_service.sign_in(db, email=form_data.username, password=form_data.password)


@router.post("/federated", response_model=Token)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def federated_login(
    request: Request,
    sign_in: FederatedSignIn,
    db: Session = Depends(get_db),
) -> Any:
    """
    Exchange an identity-provider token for an access token.
    """
    return auth_service.federated_sign_in(db, sign_in.provider, sign_in.id_token)


@router.post("/logout")
async def logout(
    db: Session = Depends(get_db),
    payload: Dict[str, Any] = Depends(get_token_payload),
    current_user: User = Depends(get_current_user),
):
    """Revoke the current access token."""
    auth_service.sign_out(db, payload, current_user)
    return {"status": "signed_out"}


@router.get("/users/me", response_model=UserResponse)
async def read_users_me(
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Get current user.
    """
    return current_user


@router.get("/session", response_model=SessionResponse)
async def read_session(
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
) -> Any:
    """Current session: the signed-in user (or null) and whether they are an admin."""
    if current_user is None:
        return SessionResponse()
    return SessionResponse(
        user=UserResponse.model_validate(current_user),
        is_admin=admin_service.is_admin(db, current_user.id),
    )
