from fastapi import APIRouter
from fastapi.responses import JSONResponse

from census_admin.analytics.schemas import AnalyticsReport
from census_admin.analytics.service import export_filename
from census_admin.dependencies import AnalyticsServiceDep, CurrentSession

router = APIRouter()


@router.get("/", response_model=AnalyticsReport)
async def get_analytics(
    context: CurrentSession,
    service: AnalyticsServiceDep,
) -> AnalyticsReport:
    return await service.get_report(context)


@router.get("/export")
async def export_analytics(
    context: CurrentSession,
    service: AnalyticsServiceDep,
) -> JSONResponse:
    report = await service.get_report(context)
    return JSONResponse(
        content=report.model_dump(mode="json", by_alias=True),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(report)}"'},
    )
