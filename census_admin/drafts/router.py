from fastapi import APIRouter, Response

from census_admin.dependencies import CurrentSession, DraftServiceDep
from census_admin.drafts.schemas import DraftResponse
from census_admin.records.schemas import RecordForm

router = APIRouter()


@router.get("/", response_model=DraftResponse, responses={204: {"description": "No draft"}})
async def get_draft(
    context: CurrentSession,
    service: DraftServiceDep,
) -> DraftResponse | Response:
    draft = await service.load(context.session_id)
    if draft is None:
        return Response(status_code=204)
    return draft


@router.put("/", response_model=DraftResponse, responses={204: {"description": "Nothing to save"}})
async def save_draft(
    data: RecordForm,
    context: CurrentSession,
    service: DraftServiceDep,
) -> DraftResponse | Response:
    draft = await service.save(context.session_id, data)
    if draft is None:
        return Response(status_code=204)
    return draft


@router.delete("/", status_code=204)
async def clear_draft(
    context: CurrentSession,
    service: DraftServiceDep,
) -> None:
    await service.clear(context.session_id)
