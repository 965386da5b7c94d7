"""Local identity provider: accounts plus opaque session tokens."""

import hashlib
import hmac
import logging
import secrets
import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pagetrail.errors import Conflict, InvalidInput, Unauthorized
from pagetrail.models import AuthSession, User

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 200_000


def hash_password(password: str, salt: str | None = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${PBKDF2_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        _, iterations, salt, expected = stored.split("$")
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)


class LocalIdentityProvider:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self.sessions = sessions

    async def sign_up(self, email: str, password: str, username: str) -> User:
        email = (email or "").strip().lower()
        username = (username or "").strip()
        if not (email and password and username):
            raise InvalidInput("Username, email, and password are required.")

        user = User(id=str(uuid.uuid4()), email=email, username=username, password_hash=hash_password(password))
        async with self.sessions() as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise Conflict("Email already registered.") from e
            await session.refresh(user)
        logger.info("Registered user %s", user.id)
        return user

    async def sign_in(self, email: str, password: str) -> tuple[User, str]:
        email = (email or "").strip().lower()
        if not (email and password):
            raise InvalidInput("Email and password are required.")

        async with self.sessions() as session:
            result = await session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
            if user is None or not verify_password(password, user.password_hash):
                raise Unauthorized("Invalid credentials.")

            token = secrets.token_urlsafe(32)
            session.add(AuthSession(token=token, user_id=user.id))
            await session.commit()
        return user, token

    async def sign_out(self, token: str | None) -> None:
        if not token:
            return
        async with self.sessions() as session:
            await session.execute(delete(AuthSession).where(AuthSession.token == token))
            await session.commit()

    async def resolve(self, token: str | None) -> str | None:
        """User id behind a session token, or None when the token is unknown."""
        if not token:
            return None
        async with self.sessions() as session:
            result = await session.execute(select(AuthSession.user_id).where(AuthSession.token == token))
            return result.scalar_one_or_none()
