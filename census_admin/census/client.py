from collections.abc import Sequence
from typing import Any

import httpx
import pydantic
import structlog

from census_admin.census.base import CensusApi
from census_admin.census.schemas import (
    ApiResponse,
    AuthPayload,
    CensusRecord,
    CensusRecordCreate,
    CensusRecordUpdate,
    CensusStats,
    ImportedCount,
    PaginatedResponse,
    RecordQuery,
)
from census_admin.config import settings
from census_admin.exceptions import UpstreamError

logger = structlog.get_logger()

LOGIN_PATH = "/api/auth/login"
REGISTER_PATH = "/api/auth/register"
UPDATE_EMAIL_PATH = "/api/auth/update-email"
UPDATE_PASSWORD_PATH = "/api/auth/update-password"
CENSUS_PATH = "/api/census"
CENSUS_STATS_PATH = "/api/census/stats"
CENSUS_IMPORT_PATH = "/api/census/import"

UNREACHABLE_MESSAGE = "Unable to reach the census server"

_client: httpx.AsyncClient | None = None


async def init_census_client() -> None:
    global _client
    _client = httpx.AsyncClient(base_url=settings.api_base_url, timeout=settings.api_timeout)
    logger.info("census_client_initialized", base_url=settings.api_base_url)


async def close_census_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
        logger.info("census_client_closed")


def get_http_client() -> httpx.AsyncClient:
    if _client is None:
        raise RuntimeError("Census client not initialized. Call init_census_client() first.")
    return _client


class HttpCensusApi(CensusApi):
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def login(self, email: str, password: str) -> ApiResponse[AuthPayload]:
        body = await self._request(
            "POST",
            LOGIN_PATH,
            json={"email": email, "password": password},
            fallback="Login failed",
        )
        return self._parse(ApiResponse[AuthPayload], body)

    async def register(self, email: str, password: str) -> ApiResponse[AuthPayload]:
        body = await self._request(
            "POST",
            REGISTER_PATH,
            json={"email": email, "password": password},
            fallback="Registration failed",
        )
        return self._parse(ApiResponse[AuthPayload], body)

    async def update_email(self, token: str, new_email: str, password: str) -> ApiResponse[dict]:
        body = await self._request(
            "PUT",
            UPDATE_EMAIL_PATH,
            token=token,
            json={"newEmail": new_email, "password": password},
            fallback="Email update failed",
        )
        return self._parse(ApiResponse[dict], body)

    async def update_password(
        self, token: str, current_password: str, new_password: str
    ) -> ApiResponse[dict]:
        body = await self._request(
            "PUT",
            UPDATE_PASSWORD_PATH,
            token=token,
            json={"currentPassword": current_password, "newPassword": new_password},
            fallback="Password update failed",
        )
        return self._parse(ApiResponse[dict], body)

    async def create_record(
        self, token: str, record: CensusRecordCreate
    ) -> ApiResponse[CensusRecord]:
        body = await self._request(
            "POST",
            CENSUS_PATH,
            token=token,
            json=record.model_dump(by_alias=True),
            fallback="Failed to create the record",
        )
        return self._parse(ApiResponse[CensusRecord], body)

    async def list_records(
        self, token: str, query: RecordQuery | None = None
    ) -> PaginatedResponse[CensusRecord]:
        params = query.model_dump(by_alias=True, exclude_none=True) if query else {}
        body = await self._request(
            "GET",
            CENSUS_PATH,
            token=token,
            params=params,
            fallback="Failed to fetch records",
        )
        return self._parse(PaginatedResponse[CensusRecord], body)

    async def get_record(self, token: str, record_id: str) -> ApiResponse[CensusRecord]:
        body = await self._request(
            "GET",
            f"{CENSUS_PATH}/{record_id}",
            token=token,
            fallback="Failed to fetch the record",
        )
        return self._parse(ApiResponse[CensusRecord], body)

    async def update_record(
        self, token: str, record_id: str, record: CensusRecordUpdate
    ) -> ApiResponse[CensusRecord]:
        body = await self._request(
            "PUT",
            f"{CENSUS_PATH}/{record_id}",
            token=token,
            json=record.model_dump(by_alias=True, exclude_none=True),
            fallback="Failed to update the record",
        )
        return self._parse(ApiResponse[CensusRecord], body)

    async def delete_record(self, token: str, record_id: str) -> ApiResponse[dict]:
        body = await self._request(
            "DELETE",
            f"{CENSUS_PATH}/{record_id}",
            token=token,
            fallback="Failed to delete the record",
        )
        return self._parse(ApiResponse[dict], body)

    async def get_stats(self, token: str) -> ApiResponse[CensusStats]:
        body = await self._request(
            "GET",
            CENSUS_STATS_PATH,
            token=token,
            fallback="Failed to fetch statistics",
        )
        return self._parse(ApiResponse[CensusStats], body)

    async def import_records(
        self, token: str, records: Sequence[CensusRecordCreate]
    ) -> ApiResponse[ImportedCount]:
        body = await self._request(
            "POST",
            CENSUS_IMPORT_PATH,
            token=token,
            json={"records": [r.model_dump(by_alias=True) for r in records]},
            fallback="Import failed",
        )
        return self._parse(ApiResponse[ImportedCount], body)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        fallback: str,
        token: str | None = None,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> dict:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._client.request(
                method, path, headers=headers, json=json, params=params
            )
        except httpx.HTTPError as exc:
            logger.error("census_api_unreachable", method=method, path=path, error=str(exc))
            raise UpstreamError(UNREACHABLE_MESSAGE) from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error:
            message = body.get("message") or fallback
            logger.error(
                "census_api_error",
                method=method,
                path=path,
                status=response.status_code,
                message=message,
            )
            raise UpstreamError(message, status_code=response.status_code)

        return body

    @staticmethod
    def _parse(model: type[pydantic.BaseModel], body: dict) -> Any:
        try:
            return model.model_validate(body)
        except pydantic.ValidationError as exc:
            logger.error("census_api_unexpected_body", model=model.__name__, error=str(exc))
            raise UpstreamError("Unexpected response from the census server") from exc
