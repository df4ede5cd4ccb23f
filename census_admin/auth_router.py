import structlog
from fastapi import APIRouter

from census_admin.auth import issue_token
from census_admin.dependencies import (
    AccountServiceDep,
    CensusApiDep,
    CurrentSession,
    DraftServiceDep,
    ImportRegistryDep,
    SessionServiceDep,
)
from census_admin.exceptions import UnauthorizedError, UpstreamError, ValidationError
from census_admin.sessions.schemas import (
    EmailUpdate,
    LoginRequest,
    MessageResponse,
    PasswordUpdate,
    RegisterRequest,
    SessionUser,
    TokenResponse,
)

logger = structlog.get_logger()

router = APIRouter()

_CLIENT_ERROR_STATUSES = {400, 401, 403, 404, 409, 422}


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    api: CensusApiDep,
    sessions: SessionServiceDep,
) -> TokenResponse:
    try:
        response = await api.login(data.email, data.password)
    except UpstreamError as exc:
        if exc.status_code in _CLIENT_ERROR_STATUSES:
            raise UnauthorizedError(exc.message) from None
        raise

    if not response.success or response.data is None:
        raise UnauthorizedError(response.message or "Invalid credentials")

    context = await sessions.open(response.data.email, response.data.token)
    return TokenResponse(
        access_token=issue_token(context.session_id),
        user=SessionUser(email=context.email, name=context.name),
    )


@router.post("/register", status_code=201, response_model=MessageResponse)
async def register(data: RegisterRequest, api: CensusApiDep) -> MessageResponse:
    try:
        response = await api.register(data.email, data.password)
    except UpstreamError as exc:
        if exc.status_code in _CLIENT_ERROR_STATUSES:
            raise ValidationError(exc.message) from None
        raise

    if not response.success:
        raise ValidationError(response.message or "Registration failed")

    logger.info("account_registered", email=data.email)
    return MessageResponse(message=response.message or "Account created")


@router.post("/logout", status_code=204)
async def logout(
    context: CurrentSession,
    sessions: SessionServiceDep,
    drafts: DraftServiceDep,
    registry: ImportRegistryDep,
) -> None:
    await drafts.clear(context.session_id)
    registry.discard(context.session_id)
    await sessions.close(context)


@router.get("/me", response_model=SessionUser)
async def me(context: CurrentSession) -> SessionUser:
    return SessionUser(email=context.email, name=context.name)


@router.put("/email", response_model=SessionUser)
async def update_email(
    data: EmailUpdate,
    context: CurrentSession,
    service: AccountServiceDep,
) -> SessionUser:
    updated = await service.update_email(context, data)
    return SessionUser(email=updated.email, name=updated.name)


@router.put("/password", response_model=MessageResponse)
async def update_password(
    data: PasswordUpdate,
    context: CurrentSession,
    service: AccountServiceDep,
) -> MessageResponse:
    message = await service.update_password(context, data)
    return MessageResponse(message=message)
