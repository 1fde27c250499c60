"""
System launcher entries, split by the Starter/Performer flag.

Rows flagged "S" (starter) go to the launcher; rows flagged "P" (performer)
go to the user's own systems. Any other flag, or a row without a name or
URL, is dropped.
"""

import logging
from datetime import datetime

from core.result import Result
from models.entities import RawRow, SystemEntry, SystemsBundle
from services.session import DashboardSession, DomainQuery, cell_text

logger = logging.getLogger(__name__)

DOMAIN = "systems"
ROLE_COLUMN = "Starter/ Performer"
STARTER = "S"
PERFORMER = "P"


def parse_system(row: RawRow) -> SystemEntry | None:
    """SystemEntry for a row, or None when name or URL is missing."""
    name = cell_text(row.get("System Name"))
    url = cell_text(row.get("System URL"))
    if not name or not url:
        return None
    return SystemEntry(
        name=name,
        url=url,
        description=cell_text(row.get("Description")),
        associated_link=cell_text(row.get("Associated Links")) or None,
    )


def partition_systems(rows: list[RawRow], email: str, now: datetime) -> SystemsBundle:
    bundle = SystemsBundle()
    for row in rows:
        if cell_text(row.get("Doer Email")).lower() != email:
            continue
        role = cell_text(row.get(ROLE_COLUMN))
        if role not in (STARTER, PERFORMER):
            logger.debug(f"Dropping system row with role flag {role!r}")
            continue
        entry = parse_system(row)
        if entry is None:
            continue
        if role == STARTER:
            bundle.launcher.append(entry)
        else:
            bundle.my_system.append(entry)
    return bundle


SYSTEMS_QUERY = DomainQuery(domain=DOMAIN, action="getSystems", transform=partition_systems)


async def fetch_systems(session: DashboardSession) -> Result:
    return await session.run_query(SYSTEMS_QUERY)
