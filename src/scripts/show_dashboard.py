#!/usr/bin/env python3
"""
Print a user's dashboard data: open tasks, BIS steps, systems and delegation.

Usage:
    uv run python src/scripts/show_dashboard.py --email someone@example.com
    uv run python src/scripts/show_dashboard.py --section tasks --direct
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.auth import env_user, static_user
from core.config import LOG_LEVEL
from core.dates import format_date
from core.result import Result
from core.transport import Transport
from services.delegation import fetch_delegation_data
from services.inspection import fetch_bis_tasks
from services.session import DashboardSession
from services.systems import fetch_systems
from services.tasks import fetch_tasks

SECTIONS = ["tasks", "bis", "systems", "delegation"]


def print_failure(title: str, res: Result):
    print(f"\n{title}: FAILED ({res.error})")


def print_tasks(res: Result):
    if not res.ok:
        return print_failure("Tasks", res)
    print(f"\nTasks ({len(res.data)}):")
    for task in res.data:
        print(f"  [{task.id}] {format_date(task.planned)}  {task.name}")


def print_bis(res: Result):
    if not res.ok:
        return print_failure("BIS tasks", res)
    print(f"\nBIS tasks ({len(res.data)}):")
    for item in res.data:
        print(f"  [{item.id}] {item.planned_display}  +{item.time_delay_hrs}h  {item.fms_name}: {item.step}")
        if item.description:
            print(f"      {item.description}")


def print_systems(res: Result):
    if not res.ok:
        return print_failure("Systems", res)
    for title, entries in (("Launcher", res.data.launcher), ("My systems", res.data.my_system)):
        print(f"\n{title} ({len(entries)}):")
        for entry in entries:
            print(f"  {entry.name}  {entry.url}")


def print_delegation(res: Result):
    if not res.ok:
        return print_failure("Delegation", res)
    print(f"\nDelegation: {len(res.data.tasks)} tasks, {len(res.data.users)} users")
    for row in res.data.tasks:
        print(f"  {row}")


async def main(email: str | None, sections: list[str], direct: bool):
    user = static_user(email) if email else env_user()
    transport = Transport(relay_url=None) if direct else Transport()

    async with transport:
        session = DashboardSession(user=user, transport=transport)
        calls = {
            "tasks": (fetch_tasks, print_tasks),
            "bis": (fetch_bis_tasks, print_bis),
            "systems": (fetch_systems, print_systems),
            "delegation": (fetch_delegation_data, print_delegation),
        }
        for section in sections:
            fetch, show = calls[section]
            show(await fetch(session))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print a user's dashboard data")
    parser.add_argument("--email", help="User email (defaults to DASHBOARD_USER_EMAIL)")
    parser.add_argument(
        "--section",
        choices=SECTIONS,
        action="append",
        help="Section to print (repeatable, default: all)",
    )
    parser.add_argument(
        "--direct",
        action="store_true",
        help="Call the endpoints directly instead of through the relay",
    )
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL)
    try:
        asyncio.run(main(args.email, args.section or SECTIONS, args.direct))
    except ValueError as e:
        print(f"\nError: {e}")
        sys.exit(1)
