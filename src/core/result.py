"""Tagged outcome returned by every read and write in the data-access layer."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Result:
    """
    Either ``ok=True`` with ``data`` or ``ok=False`` with an ``error`` code.

    Callers branch on ``ok``; a failed result always has ``data=None``.
    """

    ok: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def success(cls, data: Any) -> "Result":
        return cls(ok=True, data=data, error=None)

    @classmethod
    def failure(cls, error: str) -> "Result":
        return cls(ok=False, data=None, error=error)

    def to_dict(self) -> dict:
        """Plain ``{ok, data, error}`` mapping for the presentation layer."""
        data = self.data
        if hasattr(data, "model_dump"):
            data = data.model_dump()
        elif isinstance(data, list):
            data = [d.model_dump() if hasattr(d, "model_dump") else d for d in data]
        return {"ok": self.ok, "data": data, "error": self.error}
