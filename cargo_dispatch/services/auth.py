"""
Authentication - operator sign-in on top of an external identity provider.

The identity provider owns credentials; this module only keeps the operator
profile (name, admin flag) in the users collection. ``AuthError`` messages
are meant to be shown inline on the login form.
"""

import time
import uuid
from abc import ABC, abstractmethod
from typing import Optional

import structlog
from pydantic import BaseModel
from werkzeug.security import check_password_hash, generate_password_hash

from cargo_dispatch.core.config import ConfigManager, get_config
from cargo_dispatch.core.exceptions import AuthError
from cargo_dispatch.data.models.user import User
from cargo_dispatch.services.users import UserRepository


class IdentityProvider(ABC):
    """External identity provider contract."""

    @abstractmethod
    def sign_in(self, email: str, password: str) -> str:
        """
        Verify credentials and return the account uid.

        Raises:
            AuthError: If the credentials are rejected
        """

    @abstractmethod
    def create_user(self, email: str, password: str) -> str:
        """
        Create an account and return its uid.

        Raises:
            AuthError: If the account cannot be created
        """

    @abstractmethod
    def sign_out(self) -> None:
        """End the current session."""


class InMemoryIdentityProvider(IdentityProvider):
    """Identity provider for local/demo mode; accounts live in this process."""

    MIN_PASSWORD_LENGTH = 6

    def __init__(self) -> None:
        self._accounts: dict[str, tuple[str, str]] = {}  # email -> (uid, password hash)
        self.current_uid: Optional[str] = None

    def sign_in(self, email: str, password: str) -> str:
        account = self._accounts.get(email.strip().lower())
        if account is None:
            raise AuthError("Invalid email or password")
        uid, password_hash = account
        if not check_password_hash(password_hash, password):
            raise AuthError("Invalid email or password")
        self.current_uid = uid
        return uid

    def create_user(self, email: str, password: str) -> str:
        key = email.strip().lower()
        if "@" not in key:
            raise AuthError("Invalid email address")
        if key in self._accounts:
            raise AuthError("Email already in use")
        if len(password) < self.MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password should be at least {self.MIN_PASSWORD_LENGTH} characters")

        uid = uuid.uuid4().hex
        self._accounts[key] = (uid, generate_password_hash(password))
        self.current_uid = uid
        return uid

    def sign_out(self) -> None:
        self.current_uid = None


class AdminCredentials(BaseModel):
    """Login details of a generated admin account."""

    user: User
    email: str
    password: str


class AuthService:
    """
    Login, registration and admin bootstrap.

    Uses:
    - The identity provider for credentials
    - The users collection for profile and admin flag
    """

    def __init__(
        self,
        identity: IdentityProvider,
        users: UserRepository,
        config_manager: Optional[ConfigManager] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        self.identity = identity
        self.users = users
        self.config_manager = config_manager or get_config()
        self.logger = logger or structlog.get_logger(service="auth")
        self.current_user: Optional[User] = None

    def login(self, email: str, password: str) -> User:
        """
        Sign in and load the operator profile.

        Raises:
            AuthError: If the identity provider rejects the credentials
        """
        uid = self.identity.sign_in(email, password)
        user = self.users.find(uid)
        if user is None:
            self.logger.warning("user_profile_missing", user_id=uid)
            user = User(id=uid, email=email, name=email.split("@")[0])
        self.current_user = user
        self.logger.info("user_logged_in", user_id=uid, is_admin=user.is_admin)
        return user

    def register(self, email: str, password: str, name: str) -> User:
        """
        Create a regular operator account.

        Raises:
            AuthError: If the name is blank or the account cannot be created
        """
        if not name.strip():
            raise AuthError("Please enter your name")
        user = self._create_account(email, password, name.strip(), is_admin=False)
        self.logger.info("user_registered", user_id=user.id)
        return user

    def create_admin(self, name: str) -> AdminCredentials:
        """
        Bootstrap an admin account with a generated email.

        The password is the configured default admin password.

        Raises:
            AuthError: If the name is blank or the account cannot be created
        """
        if not name.strip():
            raise AuthError("Please enter admin name")
        email = f"admin{int(time.time() * 1000)}@example.com"
        password = self.config_manager.env.admin_default_password
        user = self._create_account(email, password, name.strip(), is_admin=True)
        self.logger.info("admin_created", user_id=user.id, email=email)
        return AdminCredentials(user=user, email=email, password=password)

    def logout(self) -> None:
        """Sign out of the identity provider."""
        self.identity.sign_out()
        self.logger.info("user_logged_out", user_id=self.current_user.id if self.current_user else None)
        self.current_user = None

    def _create_account(self, email: str, password: str, name: str, is_admin: bool) -> User:
        uid = self.identity.create_user(email, password)
        user = User(id=uid, email=email, name=name, is_admin=is_admin)
        self.users.save(user)
        self.current_user = user
        return user
