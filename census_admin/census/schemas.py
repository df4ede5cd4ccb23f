from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base for payloads exchanged with the census API and the dashboard (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CensusRecordCreate(CamelModel):
    lot_number: str
    family_name: str
    responsible_name: str
    contact: str
    inhabitants: int
    children: int
    notes: str = ""


class CensusRecordUpdate(CamelModel):
    lot_number: str | None = None
    family_name: str | None = None
    responsible_name: str | None = None
    contact: str | None = None
    inhabitants: int | None = None
    children: int | None = None
    notes: str | None = None


class CensusRecord(CensusRecordCreate):
    id: str | None = Field(default=None, alias="_id")
    created_at: str | None = None
    updated_at: str | None = None


class CensusStats(CamelModel):
    total_records: int = 0
    total_households: int = 0
    total_inhabitants: int = 0
    total_children: int = 0
    total_adults: int = 0
    average_household_size: float | str | None = None


class RecordQuery(CamelModel):
    page: int | None = None
    limit: int | None = None
    family_name: str | None = None
    lot_number: str | None = None


class AuthPayload(BaseModel):
    id: str | None = None
    email: str
    token: str


class ImportedCount(BaseModel):
    imported: int | None = None


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool
    message: str | None = None
    data: DataT | None = None
    error: str | None = None


class PaginatedResponse(ApiResponse[list[DataT]], Generic[DataT]):
    count: int = 0
    total: int = 0
    page: int = 1
    pages: int = 0
