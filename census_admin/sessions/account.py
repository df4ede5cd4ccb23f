import re

import structlog

from census_admin.census.base import CensusApi
from census_admin.exceptions import UpstreamError, ValidationError
from census_admin.sessions.schemas import EmailUpdate, PasswordUpdate, SessionContext
from census_admin.sessions.service import SessionService

logger = structlog.get_logger()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def check_password_change(data: PasswordUpdate) -> str | None:
    """Return the first problem with a password change request, if any."""
    if not data.current_password or not data.new_password or not data.confirm_password:
        return "All password fields are required"
    if len(data.new_password) < MIN_PASSWORD_LENGTH:
        return f"New password must be at least {MIN_PASSWORD_LENGTH} characters"
    if data.new_password != data.confirm_password:
        return "Passwords do not match"
    if data.new_password == data.current_password:
        return "New password must be different from the current one"
    return None


class AccountService:
    def __init__(self, api: CensusApi, sessions: SessionService) -> None:
        self._api = api
        self._sessions = sessions

    async def update_email(self, context: SessionContext, data: EmailUpdate) -> SessionContext:
        new_email = data.new_email.strip()
        if not EMAIL_PATTERN.match(new_email):
            raise ValidationError("Please enter a valid email address")
        if not data.password:
            raise ValidationError("Password is required to change the email")
        if new_email == context.email:
            raise ValidationError("New email must be different from the current one")

        response = await self._api.update_email(context.api_token, new_email, data.password)
        if not response.success:
            raise UpstreamError(response.message or "Email update failed")

        logger.info("account_email_updated", session_id=context.session_id)
        return await self._sessions.change_email(context, new_email)

    async def update_password(self, context: SessionContext, data: PasswordUpdate) -> str:
        problem = check_password_change(data)
        if problem is not None:
            raise ValidationError(problem)

        response = await self._api.update_password(
            context.api_token, data.current_password, data.new_password
        )
        if not response.success:
            raise UpstreamError(response.message or "Password update failed")

        logger.info("account_password_updated", session_id=context.session_id)
        return response.message or "Password updated successfully"
