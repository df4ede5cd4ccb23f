"""Tests for record listing, search and form submission."""

from __future__ import annotations

import pytest

from census_admin.census.schemas import CensusRecordCreate
from census_admin.drafts.repository import DraftRepository
from census_admin.drafts.service import DraftService
from census_admin.exceptions import FormValidationError, NotFoundError
from census_admin.records.schemas import RecordForm
from census_admin.records.service import RecordService, filter_records, paginate
from census_admin.sessions.schemas import SessionContext
from tests.fakes import FakeCensusApi

CONTEXT = SessionContext(session_id="s", email="admin@census.test", name="admin", api_token="tok")


async def seed(api: FakeCensusApi, count: int) -> None:
    for i in range(count):
        await api.create_record(
            "tok",
            CensusRecordCreate(
                lot_number=f"LOT{i:03d}",
                family_name="Dupont" if i % 2 else "Martin",
                responsible_name=f"Person {i}",
                contact=f"0612{i:06d}",
                inhabitants=3,
                children=1,
            ),
        )


async def test_filter_matches_names_case_insensitively():
    api = FakeCensusApi()
    await seed(api, 4)
    records = list(api.records.values())

    assert len(filter_records(records, "dupont")) == 2
    assert len(filter_records(records, "lot002")) == 1
    assert len(filter_records(records, "0612000003")) == 1
    assert filter_records(records, "") == records


async def test_paginate_splits_pages():
    api = FakeCensusApi()
    await seed(api, 25)

    page = paginate(list(api.records.values()), page=3, limit=10)

    assert page.pages == 3
    assert page.count == 5
    assert page.total == 25


async def test_search_fetches_everything_then_pages_locally(db):
    api = FakeCensusApi()
    await seed(api, 30)
    service = RecordService(api, DraftService(DraftRepository(db)), page_size=10, search_limit=1000)

    page = await service.list_records(CONTEXT, page=2, search="Dupont")

    assert api.list_queries[-1].limit == 1000
    assert page.total == 15
    assert page.count == 5


async def test_create_rejects_bad_form_with_all_field_errors(db):
    service = RecordService(FakeCensusApi(), DraftService(DraftRepository(db)))

    with pytest.raises(FormValidationError) as exc_info:
        await service.create(CONTEXT, RecordForm(lot_number="L1", contact="123"))

    assert "contact" in exc_info.value.errors
    assert "familyName" in exc_info.value.errors


async def test_create_clears_the_draft(db):
    drafts = DraftService(DraftRepository(db))
    await drafts.save(CONTEXT.session_id, RecordForm(lot_number="L1"))
    service = RecordService(FakeCensusApi(), drafts)

    record = await service.create(
        CONTEXT,
        RecordForm(
            lot_number="L1",
            family_name="Dupont",
            responsible_name="Jean",
            contact="0612345678",
            inhabitants="4",
            children="2",
        ),
    )

    assert record.id is not None
    assert await drafts.load(CONTEXT.session_id) is None


async def test_missing_record_is_not_found(db):
    service = RecordService(FakeCensusApi(), DraftService(DraftRepository(db)))

    with pytest.raises(NotFoundError):
        await service.get_by_id(CONTEXT, "missing")
    with pytest.raises(NotFoundError):
        await service.delete(CONTEXT, "missing")
