"""Tests for record form validation."""

from __future__ import annotations

from census_admin.records.schemas import RecordForm
from census_admin.records.validation import form_progress, to_record, validate_field, validate_form


def full_form(**overrides) -> RecordForm:
    fields = {
        "lot_number": "L1",
        "family_name": "Dupont",
        "responsible_name": "Jean Dupont",
        "contact": "0612345678",
        "inhabitants": "4",
        "children": "2",
        "notes": "",
    }
    fields.update(overrides)
    return RecordForm(**fields)


def test_complete_form_has_no_errors():
    assert validate_form(full_form()) == {}


def test_empty_form_flags_every_required_field():
    errors = validate_form(RecordForm())
    assert set(errors) == {
        "lotNumber",
        "familyName",
        "responsibleName",
        "contact",
        "inhabitants",
        "children",
    }
    assert errors["lotNumber"] == "This field is required"


def test_field_rules():
    assert validate_field("contact", "1234567") == "A valid contact number is required"
    assert validate_field("inhabitants", "0") == "Must be at least 1"
    assert validate_field("inhabitants", "two") == "Must be at least 1"
    assert validate_field("children", "-1") == "Must be 0 or more"
    assert validate_field("children", "0") is None
    assert validate_field("notes", "x" * 501) is not None
    assert validate_field("notes", "") is None


def test_progress_counts_required_fields_only():
    assert form_progress(RecordForm()) == 0
    assert form_progress(RecordForm(lot_number="L1", family_name="A", notes="n")) == 33.33
    assert form_progress(full_form()) == 100


def test_to_record_converts_numbers_and_trims():
    record = to_record(full_form(lot_number=" L1 ", inhabitants=" 4 "))
    assert record.lot_number == "L1"
    assert record.inhabitants == 4
    assert record.children == 2
