"""Identity and session manager: signup, login, logout, current user."""
from typing import List, Optional

from marketplace.db import StoreKeys
from marketplace.errors import DuplicateEmailError, InvalidCredentialsError
from marketplace.logging import get_logger, mask_email_for_logging, sanitize_id_for_logging
from marketplace.models import Session, User
from marketplace.services.base import BaseManager

from .password import hash_password

logger = get_logger(__name__)


class IdentityManager(BaseManager):
    """
    Manages user records and the single active session.

    Email uniqueness is checked at signup only, with a case-sensitive
    exact match. There is at most one session per store.
    """

    async def list_users(self) -> List[User]:
        return await self._load(StoreKeys.USERS, User)

    async def get_user(self, user_id: str) -> Optional[User]:
        """Resolve a user id; None when nothing matches."""
        users = await self.list_users()
        return next((u for u in users if u.id == user_id), None)

    async def signup(self, name: str, email: str, password: str) -> User:
        """Register a new user. Raises DuplicateEmailError if email is taken."""
        async with self.store.lock(StoreKeys.USERS):
            users = await self.list_users()
            if any(u.email == email for u in users):
                raise DuplicateEmailError(email)

            password_hash = await hash_password(password)
            user = User(name=name, email=email, password_hash=password_hash)
            users.append(user)
            await self._save(StoreKeys.USERS, users)

        logger.info(
            f"User signed up: {sanitize_id_for_logging(user.id)} "
            f"({mask_email_for_logging(email)})"
        )
        return user

    async def login(self, email: str, password: str) -> User:
        """Open a session for the matching user, replacing any existing one."""
        users = await self.list_users()
        password_hash = await hash_password(password)
        user = next(
            (u for u in users if u.email == email and u.password_hash == password_hash),
            None,
        )
        if user is None:
            logger.info(f"Failed login for {mask_email_for_logging(email)}")
            raise InvalidCredentialsError()

        session = Session(user_id=user.id)
        await self.store.write(StoreKeys.SESSION, session.model_dump(mode="json"))
        logger.info(f"User logged in: {sanitize_id_for_logging(user.id)}")
        return user

    async def logout(self) -> None:
        """Drop the session. Cart and catalog are kept."""
        await self.store.remove(StoreKeys.SESSION)
        logger.info("Session closed")

    async def get_session(self) -> Optional[Session]:
        data = await self.store.read(StoreKeys.SESSION)
        if not isinstance(data, dict):
            return None
        try:
            return Session.model_validate(data)
        except ValueError:
            logger.warning("Stored session is invalid, treating as logged out")
            return None

    async def current_user(self) -> Optional[User]:
        """User behind the active session, or None if logged out or dangling."""
        session = await self.get_session()
        if session is None:
            return None

        user = await self.get_user(session.user_id)
        if user is None:
            logger.warning(
                f"Session references missing user {sanitize_id_for_logging(session.user_id)}"
            )
        return user
