"""Authentication service - login, logout, session lookup, password change."""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.config import get_settings
from src.tracker.core.exceptions import InvalidCredentialsError, UnauthorizedError
from src.tracker.core.logging import get_logger
from src.tracker.core.security import (
    DUMMY_PASSWORD_HASH,
    generate_session_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.tracker.models import User, UserSession, utc_now
from src.tracker.repositories import SessionRepository, UserRepository

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Cookie sessions backed by the `sessions` table.

    The raw token lives only in the client cookie; the table keeps its
    SHA256 hash.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        session_repo: SessionRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.session = session

    async def login(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> tuple[User, str]:
        """Verify credentials and open a session.

        Returns:
            (user, raw session token)

        Raises:
            UnauthorizedError: unknown email or wrong password (indistinguishable).
        """
        try:
            user = await self.user_repo.get_by_email(email)

            # Always verify, even for unknown emails, so timing does not leak existence
            password_hash = user.password_hash if user else DUMMY_PASSWORD_HASH
            password_valid = verify_password(password, password_hash)

            if user is None or not password_valid:
                logger.info("Login failed", email_known=user is not None)
                raise UnauthorizedError(INVALID_CREDENTIALS)

            await self.session_repo.delete_expired()

            token = generate_session_token()
            settings = get_settings()
            self.session_repo.add(
                UserSession(
                    user_id=user.id,  # type: ignore[arg-type]
                    token_hash=hash_token(token),
                    expires_at=utc_now() + timedelta(days=settings.session_expire_days),
                    ip_address=ip_address,
                    user_agent=user_agent[:500] if user_agent else None,
                )
            )
            await self.session.commit()
            logger.info("User logged in", user_id=user.id)
            return user, token
        except Exception:
            await self.session.rollback()
            raise

    async def logout(self, token: str | None) -> None:
        """Drop the session behind `token`, if any. Idempotent."""
        if not token:
            return
        try:
            removed = await self.session_repo.delete_by_hash(hash_token(token))
            await self.session.commit()
            if removed:
                logger.info("Session closed")
        except Exception:
            await self.session.rollback()
            raise

    async def get_session_user(self, token: str | None) -> tuple[User, UserSession] | None:
        """Resolve a session cookie to its user. None if missing, unknown or expired."""
        if not token:
            return None
        user_session = await self.session_repo.get_valid_by_hash(hash_token(token))
        if user_session is None:
            return None
        user = await self.user_repo.get_by_id(user_session.user_id)
        if user is None:
            return None
        return user, user_session

    async def change_password(self, user: User, current_password: str, new_password: str) -> None:
        """Self-service password change. Clears the must-change flag."""
        if not verify_password(current_password, user.password_hash):
            raise InvalidCredentialsError()
        try:
            user.password_hash = hash_password(new_password)
            user.must_change_password = False
            self.user_repo.add(user)
            await self.session.commit()
            logger.info("Password changed", user_id=user.id)
        except Exception:
            await self.session.rollback()
            raise
