from typing import Literal

from census_admin.census.schemas import CamelModel
from census_admin.records.schemas import RecordForm

DRAFT_SCHEMA_VERSION = 1


class StoredDraft(CamelModel):
    """What is written to the drafts table; a draft with another version is discarded on load."""

    version: Literal[1] = DRAFT_SCHEMA_VERSION
    saved_at: str
    form: RecordForm


class DraftResponse(CamelModel):
    form: RecordForm
    saved_at: str
    progress: float
