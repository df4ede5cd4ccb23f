import structlog

from census_admin.census.base import CensusApi
from census_admin.exceptions import AppError
from census_admin.imports.base import RecordParser
from census_admin.imports.intake import MAX_UPLOAD_BYTES, check_upload
from census_admin.imports.schemas import (
    ImportCandidateRecord,
    ImportOutcome,
    ImportSessionView,
    ImportSummary,
    Notification,
)
from census_admin.imports.session import ImportFile, ImportSession, ImportSessionRegistry
from census_admin.imports.submitter import BatchSubmitter, summarize
from census_admin.imports.validator import is_valid

logger = structlog.get_logger()

GENERIC_FAILURE_MESSAGE = (
    "Failed to process the file. Please check the format and try again."
)


class ImportService:
    """Drives the import pipeline for one dashboard login.

    ``owner`` identifies the login whose import session is used; ``token`` is
    the census API bearer token of that login.
    """

    def __init__(
        self,
        api: CensusApi,
        registry: ImportSessionRegistry,
        parser: RecordParser,
        max_upload_bytes: int = MAX_UPLOAD_BYTES,
    ) -> None:
        self._api = api
        self._registry = registry
        self._parser = parser
        self._max_upload_bytes = max_upload_bytes

    def get_session(self, owner: str) -> ImportSessionView:
        return self._registry.current(owner).view()

    @property
    def max_upload_bytes(self) -> int:
        return self._max_upload_bytes

    def check_file(
        self, owner: str, filename: str, content_type: str | None, size: int
    ) -> ImportOutcome | None:
        """Return the rejection outcome for an unacceptable file, or None when it may be read."""
        rejection = check_upload(filename, content_type, size, self._max_upload_bytes)
        if rejection is None:
            return None

        logger.warning(
            "import_file_rejected",
            filename=filename,
            content_type=content_type,
            size=size,
            reason=rejection.title,
        )
        return ImportOutcome(
            session=self._registry.current(owner).view(),
            notification=Notification(
                type="error", title=rejection.title, message=rejection.message
            ),
        )

    def select_file(
        self, owner: str, filename: str, content_type: str | None, content: bytes
    ) -> ImportOutcome:
        rejected = self.check_file(owner, filename, content_type, len(content))
        if rejected is not None:
            return rejected

        session = self._registry.current(owner)
        session.select_file(
            ImportFile(
                name=filename,
                content_type=content_type or "",
                size=len(content),
                content=content,
            )
        )
        logger.info("import_file_selected", session_id=session.session_id, filename=filename)
        return ImportOutcome(
            session=session.view(),
            notification=Notification(
                type="success",
                title="File selected",
                message=f"{filename} is ready to be imported",
            ),
        )

    async def run_import(self, owner: str, token: str) -> ImportOutcome:
        session = self._registry.current(owner)
        file = session.start()
        session_id = session.session_id
        logger.info("import_started", session_id=session_id, filename=file.name)

        records: list[ImportCandidateRecord] = []
        valid_records: list[ImportCandidateRecord] = []
        try:
            parsed = self._parser.parse(self._parser.decode(file.content))
            records = parsed.records
            session.record_parsed(len(records), parsed.skipped_lines)
            valid_records = [record for record in records if is_valid(record)]
            logger.info(
                "import_records_parsed",
                session_id=session_id,
                total=len(records),
                valid=len(valid_records),
                invalid=len(records) - len(valid_records),
                skipped_lines=parsed.skipped_lines,
            )
            imported = await BatchSubmitter(self._api, token).submit(valid_records)
        except AppError as exc:
            return self._fail(
                owner, session, exc.message or GENERIC_FAILURE_MESSAGE, records, valid_records
            )
        except Exception as exc:
            logger.exception("import_crashed", session_id=session_id, error=str(exc))
            return self._fail(owner, session, GENERIC_FAILURE_MESSAGE, records, valid_records)

        if not self._registry.is_current(owner, session_id):
            return self._discard(owner, session)

        session.complete(summarize(len(records), imported))
        logger.info("import_completed", session_id=session_id, imported=imported)
        return ImportOutcome(
            session=session.view(),
            notification=Notification(
                type="success",
                title="Import complete",
                message=f"{imported} records imported successfully",
            ),
        )

    def cancel(self, owner: str) -> ImportOutcome:
        return ImportOutcome(session=self._registry.reset(owner).view())

    def new_import(self, owner: str) -> ImportOutcome:
        session = self._registry.reset(owner)
        return ImportOutcome(
            session=session.view(),
            notification=Notification(
                type="info", title="Ready for import", message="Select a new file to import"
            ),
        )

    def _fail(
        self,
        owner: str,
        session: ImportSession,
        message: str,
        records: list[ImportCandidateRecord],
        valid_records: list[ImportCandidateRecord],
    ) -> ImportOutcome:
        if not self._registry.is_current(owner, session.session_id):
            return self._discard(owner, session)
        session.fail(
            message,
            ImportSummary(
                total=len(records),
                valid=len(valid_records),
                invalid=len(records) - len(valid_records),
            ),
        )
        logger.warning("import_failed", session_id=session.session_id, error=message)
        return ImportOutcome(
            session=session.view(),
            notification=Notification(type="error", title="Import failed", message=message),
        )

    def _discard(self, owner: str, stale: ImportSession) -> ImportOutcome:
        logger.warning("import_response_discarded", session_id=stale.session_id)
        return ImportOutcome(session=self._registry.current(owner).view())
