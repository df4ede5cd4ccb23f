from census_admin.census.schemas import CensusRecordCreate
from census_admin.imports.validator import MIN_CHILDREN, MIN_CONTACT_LENGTH, MIN_INHABITANTS
from census_admin.records.schemas import RecordForm

REQUIRED_FIELDS = (
    "lot_number",
    "family_name",
    "responsible_name",
    "contact",
    "inhabitants",
    "children",
)
MAX_NOTES_LENGTH = 500


def _as_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def validate_field(field: str, value: str) -> str | None:
    """Return the error message for one form field, or None when it is acceptable."""
    value = value.strip()
    if field in REQUIRED_FIELDS and not value:
        return "This field is required"

    match field:
        case "contact":
            if len(value) < MIN_CONTACT_LENGTH:
                return "A valid contact number is required"
        case "inhabitants":
            number = _as_int(value)
            if number is None or number < MIN_INHABITANTS:
                return f"Must be at least {MIN_INHABITANTS}"
        case "children":
            number = _as_int(value)
            if number is None or number < MIN_CHILDREN:
                return f"Must be {MIN_CHILDREN} or more"
        case "notes":
            if len(value) > MAX_NOTES_LENGTH:
                return f"Notes must be {MAX_NOTES_LENGTH} characters or fewer"
    return None


def validate_form(form: RecordForm, fields: tuple[str, ...] | None = None) -> dict[str, str]:
    """Check the given fields (all of them by default), keyed by camelCase name."""
    errors: dict[str, str] = {}
    for field in fields or (*REQUIRED_FIELDS, "notes"):
        message = validate_field(field, getattr(form, field))
        if message is not None:
            alias = RecordForm.model_fields[field].alias or field
            errors[alias] = message
    return errors


def form_progress(form: RecordForm) -> float:
    """Percentage of required fields that are filled in."""
    filled = sum(1 for field in REQUIRED_FIELDS if getattr(form, field).strip())
    return round(filled / len(REQUIRED_FIELDS) * 100, 2)


def to_record(form: RecordForm) -> CensusRecordCreate:
    return CensusRecordCreate(
        lot_number=form.lot_number.strip(),
        family_name=form.family_name.strip(),
        responsible_name=form.responsible_name.strip(),
        contact=form.contact.strip(),
        inhabitants=int(form.inhabitants),
        children=int(form.children),
        notes=form.notes.strip(),
    )
