from census_admin.census.schemas import CamelModel, CensusRecord


class RecordForm(CamelModel):
    """Raw form input; numbers arrive as text and are checked before submission."""

    lot_number: str = ""
    family_name: str = ""
    responsible_name: str = ""
    contact: str = ""
    inhabitants: str = ""
    children: str = ""
    notes: str = ""


class RecordPage(CamelModel):
    records: list[CensusRecord]
    page: int
    pages: int
    total: int
    count: int
