import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

from census_admin.imports.schemas import ImportCandidateRecord

MIN_FIELDS = 6

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_int(value: str) -> int:
    """Read the leading ASCII integer of ``value``; anything unreadable becomes 0."""
    match = _LEADING_INT.match(value)
    if match is None:
        return 0
    try:
        return int(match.group(1))
    except ValueError:
        # more digits than int() accepts
        return 0


@dataclass
class ParsedFile:
    records: list[ImportCandidateRecord] = field(default_factory=list)
    skipped_lines: int = 0


class RecordParser(ABC):
    @abstractmethod
    def parse(self, text: str) -> ParsedFile:
        """Parse the file text into candidate records, skipping the header row."""
        ...

    @staticmethod
    def decode(content: bytes) -> str:
        """Decode bytes to string with encoding fallback."""
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            return content.decode("latin-1")

    @staticmethod
    def build_candidate(values: Sequence[str]) -> ImportCandidateRecord:
        """Map positional columns to a candidate record."""
        return ImportCandidateRecord(
            lot_number=values[0],
            family_name=values[1],
            responsible_name=values[2],
            contact=values[3],
            inhabitants=parse_int(values[4]),
            children=parse_int(values[5]),
            notes=values[6] if len(values) > 6 else "",
        )
