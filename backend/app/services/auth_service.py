"""
Authentication Service.

Email/password and federated sign-in, sign-out by token revocation, and
session-change notifications for interested listeners.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from fastapi import HTTPException, status
from jose import JWTError
from sqlalchemy.orm import Session

from app.config import settings
from app.core import security
from app.models.user import RevokedToken, User

logger = logging.getLogger(__name__)

# Listener signature: (event, user) where event is "sign_up", "sign_in" or "sign_out"
SessionListener = Callable[[str, Optional[User]], None]


class AuthService:
    def __init__(self):
        self._listeners: List[SessionListener] = []

    # --- Session observation ---

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a session listener. Returns the matching unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str, user: Optional[User]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, user)
            except Exception:
                logger.exception(f"Session listener failed on {event}")

    # --- Users ---

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get a user by email."""
        return db.query(User).filter(User.email == email).first()

    def get_user_by_id(self, db: Session, user_id: int) -> Optional[User]:
        return db.get(User, user_id)

    def authenticate_user(
        self, db: Session, email: str, password: str
    ) -> Optional[User]:
        """Authenticate a user by email and password."""
        user = self.get_user_by_email(db, email)
        if not user:
            return None
        if not security.verify_password(password, user.hashed_password):
            return None
        return user

    def create_user(
        self,
        db: Session,
        email: str,
        password: str,
        display_name: Optional[str] = None,
    ) -> User:
        """Create a new email/password user."""
        existing_user = self.get_user_by_email(db, email)
        if existing_user:
            raise HTTPException(
                status_code=400, detail="User with this email already exists"
            )

        db_user = User(
            email=email,
            display_name=display_name,
            hashed_password=security.get_password_hash(password),
            provider="password",
            is_superuser=email in settings.ADMIN_EMAILS,
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        self._notify("sign_up", db_user)
        return db_user

    # --- Sessions ---

    def create_user_token(self, user: User) -> dict:
        """Create access token for user."""
        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        access_token = security.create_access_token(
            data={"sub": user.email, "user_id": user.id},
            expires_delta=access_token_expires,
        )
        return {"access_token": access_token, "token_type": "bearer"}

    def sign_in(self, db: Session, email: str, password: str) -> dict:
        user = self.authenticate_user(db, email, password)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Incorrect email or password",
            )
        if not user.is_active:
            raise HTTPException(status_code=400, detail="Inactive user")
        self._notify("sign_in", user)
        return self.create_user_token(user)

    def federated_sign_in(self, db: Session, provider: str, id_token: str) -> dict:
        """
        Sign in with an identity-provider token. Users are matched by provider
        subject, then by email (linking the account), else created.
        """
        if not settings.FEDERATED_JWT_KEY:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Federated sign-in is not configured",
            )
        try:
            claims = security.verify_federated_token(id_token)
        except JWTError as e:
            logger.warning(f"Rejected {provider} identity token: {e}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid identity token",
            )

        subject = claims.get("sub")
        email = claims.get("email")
        if not subject or not email:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Identity token is missing subject or email",
            )

        user = (
            db.query(User)
            .filter(User.provider == provider, User.provider_subject == subject)
            .first()
        )
        if user is None:
            user = self.get_user_by_email(db, email)
            if user is None:
                user = User(
                    email=email,
                    display_name=claims.get("name"),
                    provider=provider,
                    provider_subject=subject,
                    is_superuser=email in settings.ADMIN_EMAILS,
                )
                db.add(user)
                event = "sign_up"
            else:
                user.provider = provider
                user.provider_subject = subject
                event = "sign_in"
            db.commit()
            db.refresh(user)
            if event == "sign_up":
                self._notify("sign_up", user)

        if not user.is_active:
            raise HTTPException(status_code=400, detail="Inactive user")
        self._notify("sign_in", user)
        return self.create_user_token(user)

    def sign_out(self, db: Session, payload: Dict[str, Any], user: Optional[User]) -> None:
        """Revoke the presented access token."""
        jti = payload.get("jti")
        if jti and not self.is_token_revoked(db, jti):
            db.add(
                RevokedToken(
                    jti=jti, expires_at=datetime.utcfromtimestamp(payload["exp"])
                )
            )
            db.commit()
        self._notify("sign_out", user)

    def is_token_revoked(self, db: Session, jti: str) -> bool:
        return db.get(RevokedToken, jti) is not None


auth_service = AuthService()
