"""
User accounts: lookup, registration and password verification.

Passwords are hashed with Werkzeug's ``generate_password_hash`` (salted,
scrypt/PBKDF2 depending on the Werkzeug release) and checked with
``check_password_hash``, which compares digests in constant time.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from .. import mappers
from ..dto import RegisterRequest
from ..errors import ConflictError
from ..models import User
from ..ownership import resolve_user
from ..repositories import UserRepository
from .base import transactional

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: Session, users: UserRepository) -> None:
        self.session = session
        self.users = users

    @staticmethod
    def hash_password(raw_password: str) -> str:
        return generate_password_hash(raw_password)

    @staticmethod
    def verify_password(raw_password: str, password_hash: str) -> bool:
        """Return True when *raw_password* matches the stored hash."""
        return check_password_hash(password_hash, raw_password)

    @transactional
    def find_by_email(self, email: str) -> User | None:
        return self.users.find_by_email(email)

    @transactional
    def get_user(self, email: str) -> User:
        """Return the user registered under *email*; NotFoundError otherwise."""
        return resolve_user(self.users, email)

    @transactional
    def exists_by_email(self, email: str) -> bool:
        return self.users.exists_by_email(email)

    @transactional
    def register_user(self, request: RegisterRequest) -> User:
        """
        Create a new account, hashing the password exactly once.

        Raises:
            ConflictError: If the email is already registered.
        """
        if self.users.exists_by_email(request.email):
            raise ConflictError(f"User with email {request.email} already exists")

        user = mappers.user_from_request(request, self.hash_password(request.password))
        try:
            self.users.save(user)
        except IntegrityError as exc:
            # lost a race with a concurrent registration for the same email
            raise ConflictError(f"User with email {request.email} already exists") from exc
        logger.info("Registered user %s (id=%s)", user.email, user.id)
        return user

    @transactional
    def change_password(self, user: User, raw_password: str) -> User:
        user.password_hash = self.hash_password(raw_password)
        return self.users.save(user)

    @transactional
    def save(self, user: User) -> User:
        """Persist *user* as-is; ``password_hash`` is assumed to be hashed already."""
        return self.users.save(user)
