"""Tests for identity accessors and result shapes."""

import pytest

from core.auth import require_user_email, static_user
from core.errors import AuthRequiredError, ErrorCodes
from core.result import Result
from models.entities import Task


def test_email_is_normalized():
    assert require_user_email(static_user("  Doer@Example.COM ")) == "doer@example.com"


@pytest.mark.parametrize("email", [None, "", "   "])
def test_missing_identity_raises(email):
    with pytest.raises(AuthRequiredError) as exc_info:
        require_user_email(static_user(email))
    assert exc_info.value.code == ErrorCodes.AUTH_REQUIRED
    assert str(exc_info.value) == "AUTH_REQUIRED"


def test_result_to_dict():
    task = Task(id="1", name="Count stock", planned="2025-03-10")
    assert Result.success([task]).to_dict() == {
        "ok": True,
        "data": [{"id": "1", "name": "Count stock", "planned": task.planned}],
        "error": None,
    }
    assert Result.failure(ErrorCodes.TIMEOUT).to_dict() == {
        "ok": False,
        "data": None,
        "error": "TIMEOUT",
    }
