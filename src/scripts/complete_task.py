#!/usr/bin/env python3
"""
Mark a checklist task completed for a user.

Usage:
    uv run python src/scripts/complete_task.py TASK_ID --email someone@example.com
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
from core.transport import Transport
from services.session import DashboardSession
from services.tasks import complete_task


async def main(task_id: str, email: str | None) -> bool:
    user = static_user(email) if email else env_user()
    async with Transport() as transport:
        session = DashboardSession(user=user, transport=transport)
        res = await complete_task(session, task_id)

    if res.ok:
        print(f"Task {task_id} marked completed")
    else:
        print(f"Failed to complete task {task_id}: {res.error}")
    return res.ok


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Mark a checklist task completed")
    parser.add_argument("task_id", help="Task ID to mark completed")
    parser.add_argument("--email", help="User email (defaults to DASHBOARD_USER_EMAIL)")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL)
    try:
        ok = asyncio.run(main(args.task_id, args.email))
    except ValueError as e:
        print(f"\nError: {e}")
        sys.exit(1)
    sys.exit(0 if ok else 1)
