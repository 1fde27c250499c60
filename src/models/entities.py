"""
Entities produced by the domain adapters.

Upstream rows are untyped mappings keyed by the sheet's column headers
(``RawRow``); each adapter parses the rows it keeps into one of these models.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

RawRow = dict[str, Any]


class Task(BaseModel):
    """Open checklist task due today or earlier."""

    id: str
    name: str
    planned: date


class InspectionTask(BaseModel):
    """BIS (inspection) step assigned to the user."""

    id: str
    planned: datetime
    planned_display: str
    step: str = ""
    description: str = ""
    mark_done_url: str = ""
    fms_link: str = ""
    fms_name: str = ""
    time_delay_hrs: int = Field(ge=0)


class SystemEntry(BaseModel):
    name: str
    url: str
    description: str = ""
    associated_link: str | None = None


class SystemsBundle(BaseModel):
    """Systems split by the Starter/Performer flag."""

    launcher: list[SystemEntry] = []
    my_system: list[SystemEntry] = []


class DelegationBundle(BaseModel):
    tasks: list[RawRow] = []
    users: list[RawRow] = []
