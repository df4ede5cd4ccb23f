from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from census_admin.config import settings
from census_admin.database import get_db
from census_admin.exceptions import UnauthorizedError
from census_admin.sessions.repository import SessionRepository
from census_admin.sessions.schemas import SessionContext
from census_admin.sessions.service import SessionService

_bearer = HTTPBearer(auto_error=False)


def issue_token(session_id: str) -> str:
    expire = datetime.now(UTC) + timedelta(minutes=settings.session_expire_minutes)
    payload = {"sid": session_id, "exp": expire}
    return jwt.encode(payload, settings.session_secret, algorithm="HS256")


def decode_token(token: str) -> str:
    try:
        payload = jwt.decode(token, settings.session_secret, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Session has expired") from None
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid session token") from None

    session_id = payload.get("sid")
    if not session_id:
        raise UnauthorizedError("Invalid session token")
    return session_id


async def get_session_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),  # noqa: B008
) -> SessionContext:
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    session_id = decode_token(credentials.credentials)
    context = await SessionService(SessionRepository(get_db())).resolve(session_id)
    if context is None:
        raise UnauthorizedError("Session has ended")
    return context
