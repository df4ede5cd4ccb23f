from census_admin.imports.schemas import ImportCandidateRecord

MIN_CONTACT_LENGTH = 8
MIN_INHABITANTS = 1
MIN_CHILDREN = 0


def validation_issues(record: ImportCandidateRecord) -> list[str]:
    """Return a message for every rule the record breaks, in field order."""
    issues: list[str] = []
    if not record.lot_number.strip():
        issues.append("lotNumber is required")
    if not record.family_name.strip():
        issues.append("familyName is required")
    if not record.responsible_name.strip():
        issues.append("responsibleName is required")
    if len(record.contact.strip()) < MIN_CONTACT_LENGTH:
        issues.append(f"contact must be at least {MIN_CONTACT_LENGTH} characters")
    if record.inhabitants < MIN_INHABITANTS:
        issues.append(f"inhabitants must be at least {MIN_INHABITANTS}")
    if record.children < MIN_CHILDREN:
        issues.append(f"children must be {MIN_CHILDREN} or more")
    return issues


def is_valid(record: ImportCandidateRecord) -> bool:
    return not validation_issues(record)
