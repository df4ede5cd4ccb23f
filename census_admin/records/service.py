import math

import structlog

from census_admin.census.base import CensusApi
from census_admin.census.schemas import (
    ApiResponse,
    CensusRecord,
    CensusRecordUpdate,
    RecordQuery,
)
from census_admin.drafts.service import DraftService
from census_admin.exceptions import FormValidationError, NotFoundError, UpstreamError
from census_admin.records.schemas import RecordForm, RecordPage
from census_admin.records.validation import to_record, validate_form
from census_admin.sessions.schemas import SessionContext

logger = structlog.get_logger()


def filter_records(records: list[CensusRecord], term: str) -> list[CensusRecord]:
    """Case-insensitive match on lot, family and responsible names; plain substring on contact."""
    if not term:
        return list(records)
    needle = term.lower()
    return [
        record
        for record in records
        if needle in record.lot_number.lower()
        or needle in record.family_name.lower()
        or needle in record.responsible_name.lower()
        or term in record.contact
    ]


def paginate(records: list[CensusRecord], page: int, limit: int) -> RecordPage:
    pages = math.ceil(len(records) / limit) if records else 0
    start = (page - 1) * limit
    chunk = records[start : start + limit]
    return RecordPage(records=chunk, page=page, pages=pages, total=len(records), count=len(chunk))


class RecordService:
    def __init__(
        self,
        api: CensusApi,
        drafts: DraftService,
        page_size: int = 10,
        search_limit: int = 1000,
    ) -> None:
        self._api = api
        self._drafts = drafts
        self._page_size = page_size
        self._search_limit = search_limit

    async def list_records(
        self,
        context: SessionContext,
        page: int = 1,
        limit: int | None = None,
        family_name: str | None = None,
        lot_number: str | None = None,
        search: str | None = None,
    ) -> RecordPage:
        limit = limit or self._page_size

        if search:
            response = await self._api.list_records(
                context.api_token, RecordQuery(page=1, limit=self._search_limit)
            )
            self._ensure_success(response, "Failed to fetch records")
            matches = filter_records(response.data or [], search.strip())
            logger.info("records_searched", term=search, matches=len(matches))
            return paginate(matches, page, limit)

        response = await self._api.list_records(
            context.api_token,
            RecordQuery(page=page, limit=limit, family_name=family_name, lot_number=lot_number),
        )
        self._ensure_success(response, "Failed to fetch records")
        records = response.data or []
        return RecordPage(
            records=records,
            page=response.page,
            pages=response.pages,
            total=response.total,
            count=response.count or len(records),
        )

    async def get_by_id(self, context: SessionContext, record_id: str) -> CensusRecord:
        try:
            response = await self._api.get_record(context.api_token, record_id)
        except UpstreamError as exc:
            if exc.status_code == 404:
                raise NotFoundError("Record", record_id) from None
            raise
        return self._unwrap(response, "Failed to fetch the record")

    async def create(self, context: SessionContext, form: RecordForm) -> CensusRecord:
        errors = validate_form(form)
        if errors:
            raise FormValidationError(errors)

        response = await self._api.create_record(context.api_token, to_record(form))
        record = self._unwrap(response, "Failed to create the record")
        await self._drafts.clear(context.session_id)

        logger.info("record_created", record_id=record.id, lot_number=record.lot_number)
        return record

    async def update(
        self, context: SessionContext, record_id: str, form: RecordForm
    ) -> CensusRecord:
        errors = validate_form(form)
        if errors:
            raise FormValidationError(errors)

        update = CensusRecordUpdate.model_validate(to_record(form).model_dump())
        try:
            response = await self._api.update_record(context.api_token, record_id, update)
        except UpstreamError as exc:
            if exc.status_code == 404:
                raise NotFoundError("Record", record_id) from None
            raise
        record = self._unwrap(response, "Failed to update the record")

        logger.info("record_updated", record_id=record_id)
        return record

    async def delete(self, context: SessionContext, record_id: str) -> None:
        try:
            response = await self._api.delete_record(context.api_token, record_id)
        except UpstreamError as exc:
            if exc.status_code == 404:
                raise NotFoundError("Record", record_id) from None
            raise
        self._ensure_success(response, "Failed to delete the record")

        logger.info("record_deleted", record_id=record_id)

    @staticmethod
    def _ensure_success(response: ApiResponse, fallback: str) -> None:
        if not response.success:
            raise UpstreamError(response.message or fallback)

    @classmethod
    def _unwrap(cls, response: ApiResponse[CensusRecord], fallback: str) -> CensusRecord:
        cls._ensure_success(response, fallback)
        if response.data is None:
            raise UpstreamError(fallback)
        return response.data
