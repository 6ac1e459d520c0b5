"""Credential store: password hashing and login verification."""

import logging
import secrets

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from peopleledger.database.base import Database
from peopleledger.domain.entities import AuthenticatedUser
from peopleledger.domain.errors import (
    INVALID_CREDENTIALS,
    InvalidCredentialsError,
    UsernameTakenError,
    ValidationError,
    collect,
    username_taken,
)
from peopleledger.domain.validation import (
    NAME_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    check_text,
    clean_text,
)

logger = logging.getLogger(__name__)

SALT_LENGTH = 32
KEY_LENGTH = 32
ITERATIONS = 100_000


def _kdf(salt: bytes) -> PBKDF2HMAC:
    return PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=ITERATIONS,
    )


def hash_password(password: str) -> tuple[bytes, bytes]:
    """Derive a key from ``password`` with a fresh random salt.

    Returns:
        (password_hash, password_salt), both 32 bytes
    """
    salt = secrets.token_bytes(SALT_LENGTH)
    return _kdf(salt).derive(password.encode("utf-8")), salt


def verify_password(password: str, password_hash: bytes, password_salt: bytes) -> bool:
    """Check ``password`` against a stored hash using a constant-time compare."""
    try:
        _kdf(password_salt).verify(password.encode("utf-8"), password_hash)
    except InvalidKey:
        return False
    return True


class CredentialService:
    """Service for registering users and verifying logins."""

    def __init__(self, db: Database):
        """Initialize credential service.

        Args:
            db: Database instance
        """
        self.db = db

    def register(self, name: str, username: str, password: str) -> int:
        """Register a new user.

        Args:
            name: Display name
            username: Login name, unique and case-sensitive
            password: Plaintext password, never stored

        Returns:
            User ID

        Raises:
            ValidationError: If a field is missing or out of range
            UsernameTakenError: If the username already exists
        """
        name = clean_text(name)
        username = clean_text(username)

        errors = check_text(name, "Name", NAME_MAX_LENGTH, required=True)
        errors += check_text(username, "Username", USERNAME_MAX_LENGTH, required=True)
        if password is None or not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
            errors.append(
                ValidationError(
                    f"Password must be between {PASSWORD_MIN_LENGTH} and "
                    f"{PASSWORD_MAX_LENGTH} characters"
                )
            )
        collect(errors)

        if self.db.get_user_by_username(username) is not None:
            raise UsernameTakenError(username_taken(username))

        password_hash, password_salt = hash_password(password)
        user_id = self.db.create_user(
            name=name,
            username=username,
            password_hash=password_hash,
            password_salt=password_salt,
        )
        logger.info("User registered: %s", username)
        return user_id

    def verify(self, username: str, password: str) -> AuthenticatedUser:
        """Verify a login attempt.

        Raises:
            InvalidCredentialsError: For an unknown user or a wrong password;
                the two cases are indistinguishable to the caller
        """
        user = self.db.get_user_by_username(username)
        if user is None:
            # Same derivation cost as a wrong password
            verify_password(password, bytes(KEY_LENGTH), bytes(SALT_LENGTH))
            logger.warning("Failed login attempt for username %r", username)
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash, user.password_salt):
            logger.warning("Failed login attempt for username %r", username)
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        logger.info("User logged in: %s", username)
        return AuthenticatedUser(username=user.username, display_name=user.name)

    def has_users(self) -> bool:
        """Return True once at least one user has signed up."""
        return self.db.count_users() > 0
