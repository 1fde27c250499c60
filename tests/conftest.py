"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import datetime
from pathlib import Path
from urllib.parse import parse_qs

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.auth import static_user
from core.cache import ResultCache
from core.transport import Transport
from services.session import DashboardSession

ENDPOINTS = {
    "tasks": "https://tasks.example.test/exec",
    "bis": "https://bis.example.test/exec",
    "systems": "https://systems.example.test/exec",
    "delegation": "https://delegation.example.test/exec",
}


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start_ms: float = 1_000_000):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float):
        self.now_ms += ms


class Upstream:
    """Records requests and answers them with a scripted handler."""

    def __init__(self, handler):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        return self.handler(request)

    def actions(self) -> list[str]:
        """The ``action`` of each request, from the query string or form body."""
        found = []
        for request in self.requests:
            action = request.url.params.get("action")
            if action is None:
                action = parse_qs(request.content.decode())["action"][0]
            found.append(action)
        return found


@pytest.fixture
def now():
    return datetime(2025, 3, 10, 14, 30)


@pytest.fixture
def user_email():
    return "doer@example.com"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_session(clock, now, user_email):
    """Build a DashboardSession whose endpoints are served by ``handler``."""

    def factory(handler, email=user_email, at=now):
        upstream = Upstream(handler)
        client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        session = DashboardSession(
            user=static_user(email),
            transport=Transport(relay_url=None, client=client),
            cache=ResultCache(clock=clock),
            endpoints=ENDPOINTS,
            now=lambda: at,
        )
        return session, upstream

    return factory


@pytest.fixture
def task_row(user_email):
    """An open task row due today."""
    return {
        "Task ID": 101,
        "Task": "Update stock register",
        "Planned": "2025-03-10T09:00:00",
        "Email": user_email.upper(),
        "Actual": "",
        "Task Status": "",
    }
