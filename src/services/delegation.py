"""
Delegation board: tasks and users read together, plus create/update writes.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

from core.errors import ErrorCodes, InvalidPayloadError
from core.result import Result
from models.entities import DelegationBundle
from services.session import DashboardSession

DOMAIN = "delegation"


def _fields(action: str, email: str) -> dict[str, str]:
    return {"action": action, "user_email": email}


def _rows(res: Result) -> list | None:
    data = res.data if res.data is not None else []
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        return None
    return data


async def fetch_delegation_data(session: DashboardSession) -> Result:
    """
    Fetch delegated tasks and the assignable users concurrently.

    Both halves are cached together: if either call fails the whole bundle
    fails and nothing is cached.
    """
    email = session.current_email()

    async def compute() -> Result:
        tasks, users = await asyncio.gather(
            session.call(DOMAIN, params=_fields("get_tasks", email)),
            session.call(DOMAIN, params=_fields("get_users", email)),
        )
        if not tasks.ok:
            return tasks
        if not users.ok:
            return users

        task_rows, user_rows = _rows(tasks), _rows(users)
        if task_rows is None or user_rows is None:
            return Result.failure(ErrorCodes.INVALID_RESPONSE)
        return Result.success(DelegationBundle(tasks=task_rows, users=user_rows))

    return await session.cached(DOMAIN, email, compute)


def encode_payload(payload: Mapping[str, Any]) -> dict[str, str]:
    """Form-encode a payload mapping; None becomes an empty field."""
    return {str(k): "" if v is None else str(v) for k, v in payload.items()}


async def _delegation_write(
    session: DashboardSession, action: str, payload: Mapping[str, Any]
) -> Result:
    if payload is None or not isinstance(payload, Mapping):
        raise InvalidPayloadError()
    email = session.current_email()

    res = await session.call(
        DOMAIN,
        method="POST",
        params=_fields(action, email),
        form=encode_payload(payload),
    )
    if res.ok:
        session.invalidate(DOMAIN, email)
    return res


async def create_delegation_task(session: DashboardSession, payload: Mapping[str, Any]) -> Result:
    return await _delegation_write(session, "create_task", payload)


async def update_delegation_task(session: DashboardSession, payload: Mapping[str, Any]) -> Result:
    return await _delegation_write(session, "update_task", payload)
