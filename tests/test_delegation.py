"""Tests for the delegation adapter."""

import asyncio
from urllib.parse import parse_qs

import httpx
import pytest

from core.errors import ErrorCodes, InvalidPayloadError
from services.delegation import (
    create_delegation_task,
    fetch_delegation_data,
    update_delegation_task,
)

TASKS = [{"Task ID": "D-1", "Description": "Call vendor"}]
USERS = [{"Name": "Asha", "Email": "asha@example.com"}]


def delegation_handler(tasks=None, users=None):
    def handler(request):
        action = request.url.params["action"]
        if action == "get_tasks":
            return tasks() if tasks else httpx.Response(200, json=TASKS)
        if action == "get_users":
            return users() if users else httpx.Response(200, json=USERS)
        return httpx.Response(200, json={"success": True})

    return handler


def test_bundle_combines_both_reads(make_session, user_email):
    session, upstream = make_session(delegation_handler())
    res = asyncio.run(fetch_delegation_data(session))

    assert res.ok
    assert res.data.tasks == TASKS
    assert res.data.users == USERS
    assert sorted(upstream.actions()) == ["get_tasks", "get_users"]
    assert {r.url.params["user_email"] for r in upstream.requests} == {user_email}


def test_bundle_is_cached_under_one_key(make_session):
    session, upstream = make_session(delegation_handler())
    asyncio.run(fetch_delegation_data(session))
    asyncio.run(fetch_delegation_data(session))
    assert len(upstream.requests) == 2


def test_users_failure_fails_bundle_and_is_not_cached(make_session):
    session, upstream = make_session(
        delegation_handler(users=lambda: httpx.Response(500, json={"error": "Users sheet missing"}))
    )
    first = asyncio.run(fetch_delegation_data(session))
    asyncio.run(fetch_delegation_data(session))

    assert not first.ok
    assert first.data is None
    assert first.error == "Users sheet missing"
    assert len(upstream.requests) == 4


def test_tasks_failure_reported_first(make_session):
    session, _ = make_session(
        delegation_handler(
            tasks=lambda: httpx.Response(200, text="<html>login</html>"),
            users=lambda: httpx.Response(503),
        )
    )
    res = asyncio.run(fetch_delegation_data(session))
    assert res.error == ErrorCodes.BACKEND_RETURNED_HTML


def test_null_halves_become_empty(make_session):
    session, _ = make_session(
        delegation_handler(
            tasks=lambda: httpx.Response(200, text=""),
            users=lambda: httpx.Response(200, text="null"),
        )
    )
    res = asyncio.run(fetch_delegation_data(session))
    assert res.ok
    assert res.data.tasks == []
    assert res.data.users == []


@pytest.mark.parametrize(
    "tasks_body, users_body",
    [
        (["asha@example.com", "ravi@example.com"], USERS),
        (TASKS, [None, {"Name": "Ravi"}]),
        ({"tasks": TASKS}, USERS),
    ],
)
def test_non_row_halves_are_invalid(make_session, tasks_body, users_body):
    session, upstream = make_session(
        delegation_handler(
            tasks=lambda: httpx.Response(200, json=tasks_body),
            users=lambda: httpx.Response(200, json=users_body),
        )
    )
    first = asyncio.run(fetch_delegation_data(session))
    asyncio.run(fetch_delegation_data(session))

    assert not first.ok
    assert first.error == ErrorCodes.INVALID_RESPONSE
    assert len(upstream.requests) == 4


@pytest.mark.parametrize("payload", [None, "task=1", ["a", "b"], 42])
def test_write_rejects_non_mapping_payload(make_session, payload):
    session, upstream = make_session(delegation_handler())
    with pytest.raises(InvalidPayloadError):
        asyncio.run(create_delegation_task(session, payload))
    assert upstream.requests == []


def test_create_sends_action_in_query_and_payload_as_form(make_session, user_email):
    session, upstream = make_session(delegation_handler())
    payload = {"description": "Call vendor", "assignee": "asha@example.com", "due": None}
    res = asyncio.run(create_delegation_task(session, payload))

    assert res.ok
    request = upstream.requests[0]
    assert request.method == "POST"
    assert request.url.params["action"] == "create_task"
    assert request.url.params["user_email"] == user_email
    assert parse_qs(request.content.decode(), keep_blank_values=True) == {
        "description": ["Call vendor"],
        "assignee": ["asha@example.com"],
        "due": [""],
    }


def test_update_invalidates_bundle(make_session):
    session, upstream = make_session(delegation_handler())
    asyncio.run(fetch_delegation_data(session))
    res = asyncio.run(update_delegation_task(session, {"task_id": "D-1", "status": "Done"}))
    asyncio.run(fetch_delegation_data(session))

    assert res.ok
    assert upstream.actions().count("update_task") == 1
    assert upstream.actions().count("get_tasks") == 2
