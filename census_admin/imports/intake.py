from dataclasses import dataclass

ALLOWED_EXTENSIONS = frozenset({".csv", ".xls", ".xlsx"})
ALLOWED_CONTENT_TYPES = frozenset(
    {
        "text/csv",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    }
)
MAX_UPLOAD_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class IntakeRejection:
    title: str
    message: str


def file_extension(filename: str) -> str:
    return "." + filename.rsplit(".", 1)[-1].lower()


def check_upload(
    filename: str,
    content_type: str | None,
    size: int,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> IntakeRejection | None:
    """Return why the file cannot be imported, or None when it is accepted.

    A file passes the type check when either its extension or its MIME type is
    on the allowlist.
    """
    if content_type not in ALLOWED_CONTENT_TYPES and file_extension(filename) not in ALLOWED_EXTENSIONS:
        return IntakeRejection(
            title="Invalid file",
            message="Please upload a CSV or Excel file (.csv, .xls, .xlsx)",
        )
    if size > max_bytes:
        return IntakeRejection(
            title="File too large",
            message=f"File size must be under {max_bytes // (1024 * 1024)}MB",
        )
    return None
