from datetime import UTC, datetime

import pydantic
import structlog

from census_admin.drafts.repository import DraftRepository
from census_admin.drafts.schemas import DraftResponse, StoredDraft
from census_admin.records.schemas import RecordForm
from census_admin.records.validation import form_progress

logger = structlog.get_logger()


class DraftService:
    def __init__(self, repo: DraftRepository) -> None:
        self._repo = repo

    async def save(self, owner: str, form: RecordForm) -> DraftResponse | None:
        """Persist the form; an entirely empty form is not stored."""
        if not any(value for value in form.model_dump().values()):
            return None

        draft = StoredDraft(saved_at=datetime.now(UTC).isoformat(), form=form)
        await self._repo.upsert(owner, draft.model_dump_json(by_alias=True), draft.saved_at)
        logger.debug("draft_saved", owner=owner)
        return self._to_response(draft)

    async def load(self, owner: str) -> DraftResponse | None:
        payload = await self._repo.get_payload(owner)
        if payload is None:
            return None

        try:
            draft = StoredDraft.model_validate_json(payload)
        except pydantic.ValidationError as exc:
            logger.warning("draft_discarded", owner=owner, errors=exc.error_count())
            await self._repo.delete(owner)
            return None

        return self._to_response(draft)

    async def clear(self, owner: str) -> None:
        await self._repo.delete(owner)
        logger.debug("draft_cleared", owner=owner)

    @staticmethod
    def _to_response(draft: StoredDraft) -> DraftResponse:
        return DraftResponse(
            form=draft.form,
            saved_at=draft.saved_at,
            progress=form_progress(draft.form),
        )
