from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from census_admin.analytics.router import router as analytics_router
from census_admin.auth_router import router as auth_router
from census_admin.census.client import close_census_client, init_census_client
from census_admin.config import settings
from census_admin.database import close_database, init_database
from census_admin.drafts.router import router as drafts_router
from census_admin.exception_handlers import register_exception_handlers
from census_admin.imports.router import router as imports_router
from census_admin.logging_config import setup_logging
from census_admin.records.router import router as records_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await init_database()
    await init_census_client()
    yield
    await close_census_client()
    await close_database()


app = FastAPI(
    title="Census Admin",
    description="Administrative dashboard backend for household census records",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(records_router, prefix="/api/records", tags=["records"])
app.include_router(drafts_router, prefix="/api/drafts", tags=["drafts"])
app.include_router(imports_router, prefix="/api/imports", tags=["imports"])
app.include_router(analytics_router, prefix="/api/analytics", tags=["analytics"])


@app.get("/api/health")
async def health():
    from census_admin.database import check_health

    await check_health()
    return {"status": "healthy"}
