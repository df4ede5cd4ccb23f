from census_admin.imports.base import ParsedFile, RecordParser
from census_admin.imports.csv_parser import NaiveCSVParser, QuotedCSVParser, get_parser
from census_admin.imports.intake import IntakeRejection, check_upload
from census_admin.imports.service import ImportService
from census_admin.imports.session import ImportSession, ImportSessionRegistry
from census_admin.imports.submitter import BatchSubmitter
from census_admin.imports.validator import is_valid, validation_issues

__all__ = [
    "BatchSubmitter",
    "ImportService",
    "ImportSession",
    "ImportSessionRegistry",
    "IntakeRejection",
    "NaiveCSVParser",
    "ParsedFile",
    "QuotedCSVParser",
    "RecordParser",
    "check_upload",
    "get_parser",
    "is_valid",
    "validation_issues",
]
