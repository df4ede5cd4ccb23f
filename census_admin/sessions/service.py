from datetime import UTC, datetime
from uuid import uuid4

import structlog

from census_admin.sessions.repository import SessionRepository
from census_admin.sessions.schemas import SessionContext

logger = structlog.get_logger()


def display_name(email: str) -> str:
    return email.split("@")[0]


class SessionService:
    """Opens, resolves and closes dashboard sessions."""

    def __init__(self, repo: SessionRepository) -> None:
        self._repo = repo

    async def open(self, email: str, api_token: str) -> SessionContext:
        now = datetime.now(UTC).isoformat()
        context = SessionContext(
            session_id=uuid4().hex,
            email=email,
            name=display_name(email),
            api_token=api_token,
        )
        await self._repo.create(
            {
                "session_id": context.session_id,
                "email": context.email,
                "name": context.name,
                "api_token": context.api_token,
                "created_at": now,
                "updated_at": now,
            }
        )
        logger.info("session_opened", session_id=context.session_id, email=email)
        return context

    async def resolve(self, session_id: str) -> SessionContext | None:
        row = await self._repo.get_by_id(session_id)
        if row is None:
            return None
        return SessionContext(
            session_id=row["session_id"],
            email=row["email"],
            name=row["name"],
            api_token=row["api_token"],
        )

    async def change_email(self, context: SessionContext, new_email: str) -> SessionContext:
        now = datetime.now(UTC).isoformat()
        name = display_name(new_email)
        await self._repo.update_identity(context.session_id, new_email, name, now)
        logger.info("session_email_changed", session_id=context.session_id)
        return context.model_copy(update={"email": new_email, "name": name})

    async def close(self, context: SessionContext) -> None:
        await self._repo.delete(context.session_id)
        logger.info("session_closed", session_id=context.session_id)
