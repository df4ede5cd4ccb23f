import csv
import io

import structlog

from census_admin.exceptions import AppError
from census_admin.imports.base import MIN_FIELDS, ParsedFile, RecordParser

logger = structlog.get_logger()


class NaiveCSVParser(RecordParser):
    """Comma splitting without quote awareness.

    Each value is trimmed and loses at most one leading and one trailing double
    quote. A comma inside a quoted field therefore splits it.
    """

    def parse(self, text: str) -> ParsedFile:
        lines = [line for line in text.split("\n") if line.strip()]
        result = ParsedFile()

        for row_num, line in enumerate(lines[1:], start=2):
            values = [self._clean(value) for value in line.split(",")]
            if len(values) < MIN_FIELDS:
                result.skipped_lines += 1
                logger.debug("csv_line_dropped", row=row_num, fields=len(values))
                continue
            result.records.append(self.build_candidate(values))

        return result

    @staticmethod
    def _clean(value: str) -> str:
        value = value.strip()
        if value.startswith('"'):
            value = value[1:]
        if value.endswith('"'):
            value = value[:-1]
        return value


class QuotedCSVParser(RecordParser):
    """RFC 4180 style parsing through the csv module; commas may appear inside quotes."""

    def parse(self, text: str) -> ParsedFile:
        reader = csv.reader(io.StringIO(text))
        try:
            rows = [row for row in reader if "".join(row).strip() or len(row) > 1]
        except csv.Error as exc:
            logger.warning("csv_unreadable", line=reader.line_num, error=str(exc))
            raise AppError(
                f"Unable to read the file near line {reader.line_num}", code="PARSE_ERROR"
            ) from exc
        result = ParsedFile()

        for row_num, row in enumerate(rows[1:], start=2):
            values = [value.strip() for value in row]
            if len(values) < MIN_FIELDS:
                result.skipped_lines += 1
                logger.debug("csv_line_dropped", row=row_num, fields=len(values))
                continue
            result.records.append(self.build_candidate(values))

        return result


PARSERS: dict[str, type[RecordParser]] = {
    "naive": NaiveCSVParser,
    "quoted": QuotedCSVParser,
}


def get_parser(kind: str) -> RecordParser:
    try:
        return PARSERS[kind]()
    except KeyError:
        raise AppError(f"Unknown CSV parser: '{kind}'", code="CONFIG_ERROR") from None
