from enum import StrEnum
from typing import Literal

from pydantic import BaseModel

from census_admin.census.schemas import CamelModel, CensusRecordCreate


class ImportState(StrEnum):
    idle = "idle"
    preview = "preview"
    processing = "processing"
    success = "success"
    error = "error"


class ImportCandidateRecord(CensusRecordCreate):
    """A row parsed from an import file that has not been validated yet."""


class ImportSummary(BaseModel):
    total: int = 0
    valid: int = 0
    invalid: int = 0


class Notification(BaseModel):
    type: Literal["success", "info", "warning", "error"]
    title: str
    message: str


class ImportFileInfo(CamelModel):
    name: str
    content_type: str
    size: int


class ImportSessionView(CamelModel):
    session_id: str
    state: ImportState
    file: ImportFileInfo | None = None
    progress: int = 0
    processed_records: int = 0
    total_records: int = 0
    skipped_lines: int = 0
    summary: ImportSummary
    error_message: str | None = None


class ImportOutcome(CamelModel):
    session: ImportSessionView
    notification: Notification | None = None
