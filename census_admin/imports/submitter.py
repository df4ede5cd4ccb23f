from collections.abc import Sequence

import structlog

from census_admin.census.base import CensusApi
from census_admin.exceptions import UpstreamError, ValidationError
from census_admin.imports.schemas import ImportCandidateRecord, ImportSummary

logger = structlog.get_logger()

NO_VALID_RECORDS_MESSAGE = "No valid records found in the file"
IMPORT_FAILED_MESSAGE = "Import failed"


class EmptyBatchError(ValidationError):
    def __init__(self) -> None:
        super().__init__(NO_VALID_RECORDS_MESSAGE)


class BatchSubmitter:
    def __init__(self, api: CensusApi, token: str) -> None:
        self._api = api
        self._token = token

    async def submit(self, records: Sequence[ImportCandidateRecord]) -> int:
        """Send the whole batch in one call and return how many records were imported.

        The server-reported count wins; when it is missing or zero the batch
        size is used instead. Nothing is retried.
        """
        if not records:
            raise EmptyBatchError()

        logger.info("import_batch_submitting", records=len(records))
        response = await self._api.import_records(self._token, records)

        if not response.success:
            logger.warning("import_batch_rejected", message=response.message)
            raise UpstreamError(response.message or IMPORT_FAILED_MESSAGE)

        imported = response.data.imported if response.data is not None else None
        return imported or len(records)


def summarize(total: int, imported: int) -> ImportSummary:
    return ImportSummary(total=total, valid=imported, invalid=max(total - imported, 0))
