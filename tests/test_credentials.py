"""Tests for the credential store."""

import pytest

from peopleledger.domain.credentials import (
    ITERATIONS,
    hash_password,
    verify_password,
)
from peopleledger.domain.entities import AuthenticatedUser
from peopleledger.domain.errors import (
    InvalidCredentialsError,
    UsernameTakenError,
    ValidationError,
    ValidationErrors,
)


def test_hash_password_sizes():
    password_hash, salt = hash_password("Secret1")
    assert len(password_hash) == 32
    assert len(salt) == 32
    assert ITERATIONS >= 100_000


def test_hash_password_uses_fresh_salt():
    first = hash_password("Secret1")
    second = hash_password("Secret1")
    assert first[1] != second[1]
    assert first[0] != second[0]


def test_verify_password():
    password_hash, salt = hash_password("Secret1")
    assert verify_password("Secret1", password_hash, salt)
    assert not verify_password("secret1", password_hash, salt)


def test_register_and_verify(credential_service):
    credential_service.register("Alice", "alice", "Secret1")

    result = credential_service.verify("alice", "Secret1")

    assert result == AuthenticatedUser(username="alice", display_name="Alice")


def test_plaintext_is_not_stored(credential_service, temp_db):
    credential_service.register("Alice", "alice", "Secret1")
    user = temp_db.get_user_by_username("alice")
    assert b"Secret1" not in user.password_hash
    assert len(user.password_hash) == 32
    assert len(user.password_salt) == 32


def test_wrong_password_and_unknown_user_fail_identically(credential_service):
    credential_service.register("Alice", "alice", "Secret1")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        credential_service.verify("alice", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        credential_service.verify("nobody", "x")

    assert type(wrong_password.value) is type(unknown_user.value)
    assert str(wrong_password.value) == str(unknown_user.value)
    assert wrong_password.value.code == unknown_user.value.code == "InvalidCredentials"


def test_username_is_case_sensitive(credential_service):
    credential_service.register("Alice", "alice", "Secret1")

    with pytest.raises(InvalidCredentialsError):
        credential_service.verify("Alice", "Secret1")

    # A differently-cased username is a different user
    credential_service.register("Other Alice", "Alice", "Secret2")
    assert credential_service.verify("Alice", "Secret2").display_name == "Other Alice"


def test_register_duplicate_username(credential_service):
    credential_service.register("Alice", "alice", "Secret1")

    with pytest.raises(UsernameTakenError):
        credential_service.register("Another Alice", "alice", "Secret2")


def test_register_rejects_short_password(credential_service):
    with pytest.raises(ValidationError, match="Password"):
        credential_service.register("Alice", "alice", "abc")


def test_register_collects_every_violation(credential_service):
    with pytest.raises(ValidationErrors) as exc_info:
        credential_service.register("", "x" * 51, "abc")

    assert len(exc_info.value.errors) == 3


def test_has_users(credential_service):
    assert credential_service.has_users() is False
    credential_service.register("Alice", "alice", "Secret1")
    assert credential_service.has_users() is True
