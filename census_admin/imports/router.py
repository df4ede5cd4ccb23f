from fastapi import APIRouter, UploadFile

from census_admin.dependencies import CurrentSession, ImportServiceDep
from census_admin.imports.schemas import ImportOutcome, ImportSessionView

router = APIRouter()


@router.get("/session", response_model=ImportSessionView)
async def get_import_session(
    context: CurrentSession,
    service: ImportServiceDep,
) -> ImportSessionView:
    return service.get_session(context.session_id)


@router.post("/file", response_model=ImportOutcome)
async def select_file(
    file: UploadFile,
    context: CurrentSession,
    service: ImportServiceDep,
) -> ImportOutcome:
    filename = file.filename or "upload.csv"
    if file.size is not None:
        rejected = service.check_file(context.session_id, filename, file.content_type, file.size)
        if rejected is not None:
            return rejected

    # one byte past the limit is enough to reject an undeclared oversize upload
    content = await file.read(service.max_upload_bytes + 1)
    return service.select_file(context.session_id, filename, file.content_type, content)


@router.post("/start", response_model=ImportOutcome)
async def start_import(
    context: CurrentSession,
    service: ImportServiceDep,
) -> ImportOutcome:
    return await service.run_import(context.session_id, context.api_token)


@router.post("/cancel", response_model=ImportOutcome)
async def cancel_import(
    context: CurrentSession,
    service: ImportServiceDep,
) -> ImportOutcome:
    return service.cancel(context.session_id)


@router.post("/new", response_model=ImportOutcome)
async def new_import(
    context: CurrentSession,
    service: ImportServiceDep,
) -> ImportOutcome:
    return service.new_import(context.session_id)
