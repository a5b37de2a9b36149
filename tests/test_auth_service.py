"""Tests for the auth service."""

from uuid import uuid4

import pytest

from nutri_tracker.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from nutri_tracker.domain.models import TokenClaims
from nutri_tracker.errors import (
    DuplicateUsername,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from nutri_tracker.services.auth import AuthService
from nutri_tracker.services.tokens import TokenService
from tests.conftest import TEST_SECRET, InMemoryUserRepository


def _service(repository: InMemoryUserRepository) -> AuthService:
    return AuthService(
        repository=repository,
        hasher=BcryptPasswordHasher(rounds=4),
        tokens=TokenService(secret=TEST_SECRET),
    )


def test_signup_then_login() -> None:
    repository = InMemoryUserRepository()
    service = _service(repository)

    signed_up = service.signup("Alice", "alice", "s3cret")
    logged_in = service.login("alice", "s3cret")

    assert "password" not in signed_up.user.public()
    assert "password_hash" not in signed_up.user.public()
    assert signed_up.user.password_hash != "s3cret"
    assert logged_in.user.id == signed_up.user.id
    assert service.tokens.verify(logged_in.token).username == "alice"


def test_signup_rejects_duplicate_username() -> None:
    repository = InMemoryUserRepository()
    service = _service(repository)
    service.signup("Alice", "alice", "s3cret")

    with pytest.raises(DuplicateUsername) as excinfo:
        service.signup("Other Alice", "alice", "different")

    assert excinfo.value.status_code == 400
    assert len(repository.users) == 1


def test_signup_requires_all_fields() -> None:
    service = _service(InMemoryUserRepository())

    with pytest.raises(ValidationError):
        service.signup("", "alice", "s3cret")


def test_login_failures_share_one_message() -> None:
    service = _service(InMemoryUserRepository())
    service.signup("Alice", "alice", "s3cret")

    with pytest.raises(InvalidCredentials) as wrong_password:
        service.login("alice", "nope")
    with pytest.raises(InvalidCredentials) as unknown_user:
        service.login("bob", "s3cret")

    assert wrong_password.value.message == unknown_user.value.message
    assert wrong_password.value.message == "Invalid credentials"


def test_profile_for_missing_user() -> None:
    service = _service(InMemoryUserRepository())

    with pytest.raises(NotFound):
        service.profile(TokenClaims(user_id=uuid4(), username="ghost"))


def test_bcrypt_hasher_handles_long_and_malformed_input() -> None:
    hasher = BcryptPasswordHasher(rounds=4)
    long_password = "x" * 100

    hashed = hasher.hash(long_password)

    assert hasher.verify(long_password, hashed)
    assert not hasher.verify("anything", "not-a-bcrypt-hash")
