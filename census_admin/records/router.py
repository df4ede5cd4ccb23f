from fastapi import APIRouter, Query

from census_admin.census.schemas import CensusRecord
from census_admin.dependencies import CurrentSession, RecordServiceDep
from census_admin.records.schemas import RecordForm, RecordPage

router = APIRouter()


@router.post("/", status_code=201, response_model=CensusRecord)
async def create_record(
    data: RecordForm,
    context: CurrentSession,
    service: RecordServiceDep,
) -> CensusRecord:
    return await service.create(context, data)


@router.get("/", response_model=RecordPage)
async def list_records(
    context: CurrentSession,
    service: RecordServiceDep,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    family_name: str | None = Query(default=None, alias="familyName"),
    lot_number: str | None = Query(default=None, alias="lotNumber"),
    search: str | None = None,
) -> RecordPage:
    return await service.list_records(
        context,
        page=page,
        limit=limit,
        family_name=family_name,
        lot_number=lot_number,
        search=search,
    )


@router.get("/{record_id}", response_model=CensusRecord)
async def get_record(
    record_id: str,
    context: CurrentSession,
    service: RecordServiceDep,
) -> CensusRecord:
    return await service.get_by_id(context, record_id)


@router.put("/{record_id}", response_model=CensusRecord)
async def update_record(
    record_id: str,
    data: RecordForm,
    context: CurrentSession,
    service: RecordServiceDep,
) -> CensusRecord:
    return await service.update(context, record_id, data)


@router.delete("/{record_id}", status_code=204)
async def delete_record(
    record_id: str,
    context: CurrentSession,
    service: RecordServiceDep,
) -> None:
    await service.delete(context, record_id)
