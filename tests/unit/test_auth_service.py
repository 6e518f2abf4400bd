"""
Tests for authentication, sign-out and session notifications.
"""
from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException
from jose import jwt

from app.config import settings
from app.core import security
from app.models.user import User
from app.services.admin_service import admin_service
from app.services.auth_service import AuthService

FEDERATED_KEY = "federated-test-key"


@pytest.fixture
def service():
    return AuthService()


@pytest.fixture
def federated(monkeypatch):
    monkeypatch.setattr(settings, "FEDERATED_JWT_KEY", FEDERATED_KEY)
    monkeypatch.setattr(settings, "FEDERATED_JWT_AUDIENCE", "rinde")


def identity_token(sub="google-123", email="ana@example.com", name="Ana", aud="rinde",
                   key=FEDERATED_KEY):
    claims = {"sub": sub, "email": email, "name": name, "aud": aud,
              "exp": datetime.utcnow() + timedelta(minutes=5)}
    return jwt.encode(claims, key, algorithm="HS256")


@pytest.mark.unit
class TestPasswordAuth:

    def test_create_and_authenticate(self, test_db, service):
        service.create_user(test_db, "ana@example.com", "secreto1", display_name="Ana")

        user = service.authenticate_user(test_db, "ana@example.com", "secreto1")

        assert user is not None
        assert user.display_name == "Ana"
        assert user.provider == "password"
        assert service.authenticate_user(test_db, "ana@example.com", "otro") is None
        assert service.authenticate_user(test_db, "nadie@example.com", "secreto1") is None

    def test_duplicate_email(self, test_db, service):
        service.create_user(test_db, "ana@example.com", "secreto1")

        with pytest.raises(HTTPException) as exc:
            service.create_user(test_db, "ana@example.com", "secreto2")
        assert exc.value.status_code == 400

    def test_sign_in_issues_decodable_token(self, test_db, service):
        user = service.create_user(test_db, "ana@example.com", "secreto1")

        token = service.sign_in(test_db, "ana@example.com", "secreto1")
        payload = security.decode_access_token(token["access_token"])

        assert token["token_type"] == "bearer"
        assert payload["user_id"] == user.id
        assert payload["jti"]

    def test_wrong_password(self, test_db, service):
        service.create_user(test_db, "ana@example.com", "secreto1")

        with pytest.raises(HTTPException) as exc:
            service.sign_in(test_db, "ana@example.com", "incorrecto")
        assert exc.value.status_code == 400

    def test_federated_user_cannot_use_password(self, test_db, service):
        test_db.add(User(email="fed@example.com", provider="google", provider_subject="1"))
        test_db.commit()

        assert service.authenticate_user(test_db, "fed@example.com", "") is None

    def test_configured_admin_emails_are_promoted(self, test_db, service, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_EMAILS", ["boss@example.com"])

        boss = service.create_user(test_db, "boss@example.com", "secreto1")
        shopper = service.create_user(test_db, "ana@example.com", "secreto1")

        assert admin_service.is_admin(test_db, boss.id)
        assert not admin_service.is_admin(test_db, shopper.id)


@pytest.mark.unit
class TestSignOut:

    def test_sign_out_revokes_token(self, test_db, service):
        service.create_user(test_db, "ana@example.com", "secreto1")
        token = service.sign_in(test_db, "ana@example.com", "secreto1")["access_token"]
        payload = security.decode_access_token(token)

        service.sign_out(test_db, payload, None)
        service.sign_out(test_db, payload, None)

        assert service.is_token_revoked(test_db, payload["jti"])


@pytest.mark.unit
class TestSessionListeners:

    def test_listeners_see_sign_up_in_and_out(self, test_db, service):
        events = []
        service.subscribe(lambda event, user: events.append((event, user.email if user else None)))

        user = service.create_user(test_db, "ana@example.com", "secreto1")
        token = service.sign_in(test_db, "ana@example.com", "secreto1")["access_token"]
        service.sign_out(test_db, security.decode_access_token(token), user)

        assert events == [
            ("sign_up", "ana@example.com"),
            ("sign_in", "ana@example.com"),
            ("sign_out", "ana@example.com"),
        ]

    def test_unsubscribe_stops_notifications(self, test_db, service):
        events = []
        unsubscribe = service.subscribe(lambda event, user: events.append(event))
        unsubscribe()
        unsubscribe()

        service.create_user(test_db, "ana@example.com", "secreto1")

        assert events == []

    def test_failing_listener_does_not_break_sign_up(self, test_db, service):
        def broken(event, user):
            raise RuntimeError("listener bug")

        service.subscribe(broken)

        assert service.create_user(test_db, "ana@example.com", "secreto1").id is not None


@pytest.mark.unit
class TestFederatedSignIn:

    def test_not_configured(self, test_db, service, monkeypatch):
        monkeypatch.setattr(settings, "FEDERATED_JWT_KEY", "")

        with pytest.raises(HTTPException) as exc:
            service.federated_sign_in(test_db, "google", identity_token())
        assert exc.value.status_code == 503

    def test_creates_user_on_first_sign_in(self, test_db, service, federated):
        token = service.federated_sign_in(test_db, "google", identity_token())

        user = test_db.query(User).filter(User.email == "ana@example.com").one()
        assert user.provider == "google"
        assert user.provider_subject == "google-123"
        assert user.display_name == "Ana"
        assert user.hashed_password is None
        assert security.decode_access_token(token["access_token"])["user_id"] == user.id

    def test_second_sign_in_reuses_user(self, test_db, service, federated):
        service.federated_sign_in(test_db, "google", identity_token())
        service.federated_sign_in(test_db, "google", identity_token(email="ana@example.com"))

        assert test_db.query(User).count() == 1

    def test_links_existing_password_account(self, test_db, service, federated):
        existing = service.create_user(test_db, "ana@example.com", "secreto1")

        service.federated_sign_in(test_db, "google", identity_token())

        test_db.refresh(existing)
        assert test_db.query(User).count() == 1
        assert existing.provider_subject == "google-123"

    @pytest.mark.parametrize("token_kwargs", [
        {"key": "wrong-key"},
        {"aud": "someone-else"},
        {"email": None},
    ])
    def test_rejects_bad_tokens(self, test_db, service, federated, token_kwargs):
        with pytest.raises(HTTPException) as exc:
            service.federated_sign_in(test_db, "google", identity_token(**token_kwargs))
        assert exc.value.status_code == 401
