"""The JSON envelope every API endpoint answers with."""

from __future__ import annotations

from dataclasses import asdict, dataclass, is_dataclass
from typing import Any


@dataclass
class Response:
    error: int
    msg: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the envelope as a JSON-ready dictionary."""
        data = self.data
        if hasattr(data, "to_dict"):
            data = data.to_dict()
        elif is_dataclass(data) and not isinstance(data, type):
            data = asdict(data)
        return {"error": self.error, "msg": self.msg, "data": data}