"""Tests for candidate record validation."""

from __future__ import annotations

import pytest

from census_admin.imports.schemas import ImportCandidateRecord
from census_admin.imports.validator import is_valid, validation_issues


def make_record(**overrides) -> ImportCandidateRecord:
    fields = {
        "lot_number": "L1",
        "family_name": "Dupont",
        "responsible_name": "Jean",
        "contact": "06123456",
        "inhabitants": 4,
        "children": 2,
        "notes": "",
    }
    fields.update(overrides)
    return ImportCandidateRecord(**fields)


def test_complete_record_is_valid():
    assert is_valid(make_record())
    assert validation_issues(make_record()) == []


def test_record_with_every_problem_reports_each_one():
    record = make_record(lot_number="L2", family_name="Smith", responsible_name="Ann",
                         contact="123", inhabitants=0, children=-1)

    assert not is_valid(record)
    assert validation_issues(record) == [
        "contact must be at least 8 characters",
        "inhabitants must be at least 1",
        "children must be 0 or more",
    ]


@pytest.mark.parametrize("field", ["lot_number", "family_name", "responsible_name"])
def test_blank_required_text_is_invalid(field):
    assert not is_valid(make_record(**{field: "   "}))


def test_contact_length_is_measured_after_trim():
    assert not is_valid(make_record(contact="  1234567  "))
    assert is_valid(make_record(contact=" 12345678 "))


def test_numeric_boundaries():
    assert is_valid(make_record(inhabitants=1, children=0))
    assert not is_valid(make_record(inhabitants=0))
    assert not is_valid(make_record(children=-1))


def test_notes_are_optional():
    assert is_valid(make_record(notes=""))
