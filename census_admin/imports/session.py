import time
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import uuid4

import structlog

from census_admin.config import settings
from census_admin.exceptions import ConflictError
from census_admin.imports.schemas import (
    ImportFileInfo,
    ImportSessionView,
    ImportState,
    ImportSummary,
)

logger = structlog.get_logger()

_TRANSITIONS: dict[ImportState, frozenset[ImportState]] = {
    ImportState.idle: frozenset({ImportState.preview}),
    ImportState.preview: frozenset({ImportState.processing}),
    ImportState.processing: frozenset({ImportState.success, ImportState.error}),
    ImportState.success: frozenset(),
    ImportState.error: frozenset(),
}


class InvalidTransitionError(ConflictError):
    def __init__(self, current: ImportState, target: ImportState):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move import from '{current}' to '{target}'")


@dataclass
class ImportFile:
    name: str
    content_type: str
    size: int
    content: bytes = field(repr=False)


@dataclass
class ImportSession:
    """Lifecycle of one file import.

    Moves idle -> preview -> processing -> success|error. Going back to idle is
    done by replacing the session in the registry, which also gives it a new id.
    """

    session_id: str = field(default_factory=lambda: uuid4().hex)
    state: ImportState = ImportState.idle
    file: ImportFile | None = None
    progress: int = 0
    processed_records: int = 0
    total_records: int = 0
    skipped_lines: int = 0
    summary: ImportSummary = field(default_factory=ImportSummary)
    error_message: str | None = None

    def select_file(self, file: ImportFile) -> None:
        self._move(ImportState.preview)
        self.file = file

    def start(self) -> ImportFile:
        if self.file is None:
            raise ConflictError("No file selected for import")
        self._move(ImportState.processing)
        self.progress = 0
        self.processed_records = 0
        return self.file

    def record_parsed(self, total: int, skipped_lines: int) -> None:
        self.total_records = total
        self.skipped_lines = skipped_lines

    def complete(self, summary: ImportSummary) -> None:
        self._move(ImportState.success)
        self.summary = summary
        self.progress = 100
        self.processed_records = self.total_records
        self._release_content()

    def fail(self, message: str, summary: ImportSummary | None = None) -> None:
        self._move(ImportState.error)
        self.error_message = message
        if summary is not None:
            self.summary = summary
        self._release_content()

    def view(self) -> ImportSessionView:
        file_info = None
        if self.file is not None:
            file_info = ImportFileInfo(
                name=self.file.name,
                content_type=self.file.content_type,
                size=self.file.size,
            )
        return ImportSessionView(
            session_id=self.session_id,
            state=self.state,
            file=file_info,
            progress=self.progress,
            processed_records=self.processed_records,
            total_records=self.total_records,
            skipped_lines=self.skipped_lines,
            summary=self.summary,
            error_message=self.error_message,
        )

    def _release_content(self) -> None:
        if self.file is not None:
            self.file.content = b""

    def _move(self, target: ImportState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise InvalidTransitionError(self.state, target)
        logger.debug(
            "import_state_changed",
            session_id=self.session_id,
            from_state=self.state.value,
            to_state=target.value,
        )
        self.state = target


class ImportSessionRegistry:
    """Holds the single active import session of each dashboard login.

    With ``idle_ttl`` set, an owner not seen for that many seconds loses its
    session the next time the registry is used, unless an import is running.
    """

    def __init__(
        self,
        idle_ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sessions: dict[str, ImportSession] = {}
        self._last_seen: dict[str, float] = {}
        self._idle_ttl = idle_ttl
        self._clock = clock

    def __len__(self) -> int:
        return len(self._sessions)

    def current(self, owner: str) -> ImportSession:
        self._touch(owner)
        session = self._sessions.get(owner)
        if session is None:
            session = ImportSession()
            self._sessions[owner] = session
        return session

    def reset(self, owner: str) -> ImportSession:
        self._touch(owner)
        previous = self._sessions.get(owner)
        session = ImportSession()
        self._sessions[owner] = session
        if previous is not None:
            logger.info(
                "import_session_reset",
                previous_session_id=previous.session_id,
                previous_state=previous.state.value,
                session_id=session.session_id,
            )
        return session

    def is_current(self, owner: str, session_id: str) -> bool:
        session = self._sessions.get(owner)
        return session is not None and session.session_id == session_id

    def discard(self, owner: str) -> None:
        self._sessions.pop(owner, None)
        self._last_seen.pop(owner, None)

    def _touch(self, owner: str) -> None:
        now = self._clock()
        self._last_seen[owner] = now
        if self._idle_ttl is None:
            return

        expired = []
        for other, seen in self._last_seen.items():
            session = self._sessions.get(other)
            if session is not None and session.state == ImportState.processing:
                continue
            if now - seen > self._idle_ttl:
                expired.append(other)
        for other in expired:
            self.discard(other)
        if expired:
            logger.info("import_sessions_evicted", count=len(expired))


import_sessions = ImportSessionRegistry(idle_ttl=settings.session_expire_minutes * 60)
