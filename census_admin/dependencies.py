from typing import Annotated

import aiosqlite
from fastapi import Depends

from census_admin.analytics.service import AnalyticsService
from census_admin.auth import get_session_context
from census_admin.census.base import CensusApi
from census_admin.census.client import HttpCensusApi, get_http_client
from census_admin.config import settings
from census_admin.database import get_db
from census_admin.drafts.repository import DraftRepository
from census_admin.drafts.service import DraftService
from census_admin.imports.csv_parser import get_parser
from census_admin.imports.service import ImportService
from census_admin.imports.session import ImportSessionRegistry, import_sessions
from census_admin.records.service import RecordService
from census_admin.sessions.account import AccountService
from census_admin.sessions.repository import SessionRepository
from census_admin.sessions.schemas import SessionContext
from census_admin.sessions.service import SessionService

DBConn = Annotated[aiosqlite.Connection, Depends(get_db)]
CurrentSession = Annotated[SessionContext, Depends(get_session_context)]


def get_census_api() -> CensusApi:
    return HttpCensusApi(get_http_client())


def get_import_registry() -> ImportSessionRegistry:
    return import_sessions


CensusApiDep = Annotated[CensusApi, Depends(get_census_api)]
ImportRegistryDep = Annotated[ImportSessionRegistry, Depends(get_import_registry)]


def get_session_service(db: DBConn) -> SessionService:
    return SessionService(SessionRepository(db))


def get_draft_service(db: DBConn) -> DraftService:
    return DraftService(DraftRepository(db))


SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]
DraftServiceDep = Annotated[DraftService, Depends(get_draft_service)]


def get_account_service(api: CensusApiDep, sessions: SessionServiceDep) -> AccountService:
    return AccountService(api, sessions)


def get_import_service(api: CensusApiDep, registry: ImportRegistryDep) -> ImportService:
    return ImportService(api, registry, get_parser(settings.csv_parser), settings.max_upload_bytes)


def get_record_service(api: CensusApiDep, drafts: DraftServiceDep) -> RecordService:
    return RecordService(
        api,
        drafts,
        page_size=settings.records_page_size,
        search_limit=settings.analytics_record_limit,
    )


def get_analytics_service(api: CensusApiDep) -> AnalyticsService:
    return AnalyticsService(api, record_limit=settings.analytics_record_limit)


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
ImportServiceDep = Annotated[ImportService, Depends(get_import_service)]
RecordServiceDep = Annotated[RecordService, Depends(get_record_service)]
AnalyticsServiceDep = Annotated[AnalyticsService, Depends(get_analytics_service)]
