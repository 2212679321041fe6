"""Repository for login sessions."""

from sqlalchemy import delete
from sqlmodel import select

from src.tracker.models import UserSession, utc_now
from src.tracker.repositories.base import BaseRepository


class SessionRepository(BaseRepository[UserSession]):
    model = UserSession

    async def get_valid_by_hash(self, token_hash: str) -> UserSession | None:
        """Get a non-expired session by token hash."""
        result = await self.session.execute(
            select(UserSession).where(
                UserSession.token_hash == token_hash,
                UserSession.expires_at > utc_now(),
            )
        )
        return result.scalar_one_or_none()

    async def delete_by_hash(self, token_hash: str) -> int:
        """Delete the session with this hash. Returns rows removed (0 or 1)."""
        result = await self.session.execute(
            delete(UserSession).where(UserSession.token_hash == token_hash)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_for_user(self, user_id: int) -> int:
        result = await self.session.execute(
            delete(UserSession).where(UserSession.user_id == user_id)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_expired(self) -> int:
        """Remove sessions past their expiry. Idempotent."""
        result = await self.session.execute(
            delete(UserSession).where(UserSession.expires_at <= utc_now())  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
