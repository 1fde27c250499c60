"""
Checklist tasks: read the user's open tasks and mark tasks completed.
"""

import logging
from datetime import datetime

from core.dates import normalize_date, parse_date
from core.errors import ShapeMismatch, TaskIdRequiredError
from core.result import Result
from models.entities import RawRow, Task
from services.session import DashboardSession, DomainQuery, cell_text

logger = logging.getLogger(__name__)

DOMAIN = "tasks"
OPEN_STATUSES = {"", "Due"}


def is_open_task(row: RawRow, email: str, now: datetime) -> bool:
    """
    Keep a row when it belongs to the user, has no completion timestamp,
    its status is blank or Due, and it was planned for today or earlier.
    """
    if cell_text(row.get("Email")).lower() != email:
        return False
    if cell_text(row.get("Actual")):
        return False
    if cell_text(row.get("Task Status")) not in OPEN_STATUSES:
        return False
    planned = normalize_date(parse_date(row.get("Planned")))
    return planned is not None and planned <= now.date()


def parse_task(row: RawRow, index: int | None = None) -> Task:
    """Build a Task from a row already known to have a valid Planned date."""
    task_id = cell_text(row.get("Task ID"))
    if not task_id:
        raise ShapeMismatch("Task ID", index)
    name = cell_text(row.get("Task"))
    if not name:
        raise ShapeMismatch("Task", index)
    return Task(id=task_id, name=name, planned=normalize_date(parse_date(row["Planned"])))


def shape_tasks(rows: list[RawRow], email: str, now: datetime) -> list[Task]:
    tasks = [
        parse_task(row, i) for i, row in enumerate(rows) if is_open_task(row, email, now)
    ]
    logger.debug(f"{len(tasks)} of {len(rows)} task rows open for {email}")
    # sorted() is stable, so same-day tasks keep endpoint order
    return sorted(tasks, key=lambda t: t.planned)


TASKS_QUERY = DomainQuery(domain=DOMAIN, action="getTasks", transform=shape_tasks, method="POST")


async def fetch_tasks(session: DashboardSession) -> Result:
    """Open tasks due on or before today, oldest first."""
    return await session.run_query(TASKS_QUERY)


async def complete_task(session: DashboardSession, task_id: str) -> Result:
    """
    Mark a task completed.

    Raises:
        TaskIdRequiredError: if task_id is empty
        AuthRequiredError: if nobody is signed in
    """
    if task_id is None or not str(task_id).strip():
        raise TaskIdRequiredError()
    email = session.current_email()

    res = await session.call(
        DOMAIN,
        method="POST",
        form={"action": "markCompleted", "task_id": str(task_id).strip(), "user_email": email},
    )
    if res.ok:
        session.invalidate(DOMAIN, email)
    return res
