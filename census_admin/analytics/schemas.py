from census_admin.census.schemas import CamelModel


class AgeGroup(CamelModel):
    label: str
    count: int
    percentage: float


class AnalyticsReport(CamelModel):
    total_records: int
    total_households: int
    total_inhabitants: int
    total_children: int
    total_adults: int
    average_household_size: float
    age_groups: list[AgeGroup]
    generated_at: str
