from datetime import UTC, datetime

import structlog

from census_admin.analytics.schemas import AgeGroup, AnalyticsReport
from census_admin.census.base import CensusApi
from census_admin.census.schemas import CensusRecord, CensusStats, RecordQuery
from census_admin.exceptions import UpstreamError
from census_admin.sessions.schemas import SessionContext

logger = structlog.get_logger()


def _percentage(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole > 0 else 0.0


def build_report(
    stats: CensusStats, records: list[CensusRecord], now: datetime | None = None
) -> AnalyticsReport:
    """Combine the server statistics with figures derived from the fetched records."""
    now = now or datetime.now(UTC)
    average_household_size = (
        round(sum(record.inhabitants for record in records) / len(records), 1) if records else 0.0
    )

    total_people = stats.total_inhabitants
    children = stats.total_children
    adults = total_people - children

    return AnalyticsReport(
        total_records=stats.total_records,
        total_households=stats.total_records,
        total_inhabitants=total_people,
        total_children=children,
        total_adults=adults,
        average_household_size=average_household_size,
        age_groups=[
            AgeGroup(label="0-17", count=children, percentage=_percentage(children, total_people)),
            AgeGroup(label="18+", count=adults, percentage=_percentage(adults, total_people)),
        ],
        generated_at=now.isoformat(),
    )


def export_filename(report: AnalyticsReport) -> str:
    return f"census-analytics-{report.generated_at[:10]}.json"


class AnalyticsService:
    def __init__(self, api: CensusApi, record_limit: int = 1000) -> None:
        self._api = api
        self._record_limit = record_limit

    async def get_report(self, context: SessionContext) -> AnalyticsReport:
        stats_response = await self._api.get_stats(context.api_token)
        if not stats_response.success or stats_response.data is None:
            raise UpstreamError(stats_response.message or "Failed to fetch statistics")

        records_response = await self._api.list_records(
            context.api_token, RecordQuery(page=1, limit=self._record_limit)
        )
        records: list[CensusRecord] = []
        if records_response.success and records_response.data:
            records = records_response.data

        report = build_report(stats_response.data, records)
        logger.info(
            "analytics_report_built",
            total_records=report.total_records,
            sampled_records=len(records),
        )
        return report
