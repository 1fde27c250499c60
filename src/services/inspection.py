"""
BIS inspection tasks assigned to the user, with how late each one is.
"""

from datetime import datetime

from core.dates import format_date_time, normalize_date, parse_date
from core.errors import ShapeMismatch
from core.result import Result
from models.entities import InspectionTask, RawRow
from services.session import DashboardSession, DomainQuery, cell_text

DOMAIN = "bis"


def delay_hours(planned: datetime, now: datetime) -> int:
    """Whole hours elapsed since planned; zero when planned is in the future."""
    elapsed = (now - planned).total_seconds()
    return max(0, int(elapsed // 3600))


def is_due_inspection(row: RawRow, email: str, now: datetime) -> bool:
    if cell_text(row.get("Doer Email")).lower() != email:
        return False
    planned = normalize_date(parse_date(row.get("Planned")))
    return planned is not None and planned <= now.date()


def parse_inspection(row: RawRow, now: datetime, index: int | None = None) -> InspectionTask:
    key = cell_text(row.get("Unique Keys"))
    if not key:
        raise ShapeMismatch("Unique Keys", index)
    planned = parse_date(row["Planned"])
    return InspectionTask(
        id=key,
        planned=planned,
        planned_display=format_date_time(planned),
        step=cell_text(row.get("Step")),
        description=cell_text(row.get("How")),
        mark_done_url=cell_text(row.get("Link")),
        fms_link=cell_text(row.get("FMS Link")),
        fms_name=cell_text(row.get("FMS Name")),
        time_delay_hrs=delay_hours(planned, now),
    )


def shape_inspections(rows: list[RawRow], email: str, now: datetime) -> list[InspectionTask]:
    return [
        parse_inspection(row, now, i)
        for i, row in enumerate(rows)
        if is_due_inspection(row, email, now)
    ]


BIS_QUERY = DomainQuery(domain=DOMAIN, action="getBisTasks", transform=shape_inspections)


async def fetch_bis_tasks(session: DashboardSession) -> Result:
    """Inspection steps planned for today or earlier, in endpoint order."""
    return await session.run_query(BIS_QUERY)
