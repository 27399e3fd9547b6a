"""Export helpers: turn API results into JSON."""

import json
from typing import Any

from ..content.models import ReadModel


def to_jsonable(data: Any) -> Any:
    """Recursively convert read models (and containers of them) to plain data."""
    if isinstance(data, ReadModel):
        return data.to_dict()
    if isinstance(data, dict):
        return {str(key): to_jsonable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    return data


def export_json(data: Any, indent: int | None = 2) -> str:
    return json.dumps(to_jsonable(data), indent=indent, ensure_ascii=False)
