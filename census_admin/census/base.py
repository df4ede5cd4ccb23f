from abc import ABC, abstractmethod
from collections.abc import Sequence

from census_admin.census.schemas import (
    ApiResponse,
    AuthPayload,
    CensusRecord,
    CensusRecordCreate,
    CensusRecordUpdate,
    CensusStats,
    ImportedCount,
    PaginatedResponse,
    RecordQuery,
)


class CensusApi(ABC):
    """Operations exposed by the external census record API.

    ``token`` is the bearer token of the logged-in user; it is ``None`` only for
    the unauthenticated login/register calls.
    """

    @abstractmethod
    async def login(self, email: str, password: str) -> ApiResponse[AuthPayload]: ...

    @abstractmethod
    async def register(self, email: str, password: str) -> ApiResponse[AuthPayload]: ...

    @abstractmethod
    async def update_email(
        self, token: str, new_email: str, password: str
    ) -> ApiResponse[dict]: ...

    @abstractmethod
    async def update_password(
        self, token: str, current_password: str, new_password: str
    ) -> ApiResponse[dict]: ...

    @abstractmethod
    async def create_record(
        self, token: str, record: CensusRecordCreate
    ) -> ApiResponse[CensusRecord]: ...

    @abstractmethod
    async def list_records(
        self, token: str, query: RecordQuery | None = None
    ) -> PaginatedResponse[CensusRecord]: ...

    @abstractmethod
    async def get_record(self, token: str, record_id: str) -> ApiResponse[CensusRecord]: ...

    @abstractmethod
    async def update_record(
        self, token: str, record_id: str, record: CensusRecordUpdate
    ) -> ApiResponse[CensusRecord]: ...

    @abstractmethod
    async def delete_record(self, token: str, record_id: str) -> ApiResponse[dict]: ...

    @abstractmethod
    async def get_stats(self, token: str) -> ApiResponse[CensusStats]: ...

    @abstractmethod
    async def import_records(
        self, token: str, records: Sequence[CensusRecordCreate]
    ) -> ApiResponse[ImportedCount]: ...
