"""Decoder for the ``docs_linkedSideposts`` meta value.

Two encodings are accepted:

* legacy, version 0: PHP ``serialize()`` output of an ordered array
  ``label => [target_id, ...]``;
* version 1: JSON ``{"version": 1, "boxes": [{"label": ..., "target_id": ...}]}``.

Both decode to an ordered list of BoxLink. Anything undecodable yields an
empty list and a warning: a broken blob never fails a document request.
"""

import json
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, List, Optional

import phpserialize

from ..utils.logging import get_logger

logger = get_logger(__name__)

# Legacy box labels that were stored lower-case
LEGACY_TITLES = {
    "contatti": "Contatti",
    "contatti (en)": "Contacts",
}


@dataclass(frozen=True)
class BoxLink:
    title: str
    target_id: int


def remap_title(label: str) -> str:
    return LEGACY_TITLES.get(label, label)


def _first_element(value: Any) -> Any:
    if isinstance(value, dict):
        for item in value.values():
            return item
        return None
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bytes):
        value = value.decode("utf-8", "replace")
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _decode_php(raw: str) -> List[BoxLink]:
    data = phpserialize.loads(
        raw.encode("utf-8"),
        decode_strings=True,
        array_hook=OrderedDict,
    )
    if not isinstance(data, dict):
        raise ValueError(f"expected a serialized array, got {type(data).__name__}")

    links = []
    for label, target in data.items():
        target_id = _to_int(_first_element(target))
        if target_id is None:
            logger.warning(f"Skipping box '{label}' without a target id")
            continue
        links.append(BoxLink(title=remap_title(str(label)), target_id=target_id))
    return links


def _decode_json(raw: str) -> List[BoxLink]:
    data = json.loads(raw)
    if not isinstance(data, dict) or data.get("version") != 1:
        raise ValueError("unsupported box schema version")

    boxes = data.get("boxes")
    if boxes is None:
        return []
    if not isinstance(boxes, list):
        raise ValueError(f"'boxes' must be a list, got {type(boxes).__name__}")

    links = []
    for entry in boxes:
        if not isinstance(entry, dict):
            logger.warning(f"Skipping malformed box entry: {entry!r}")
            continue
        target_id = _to_int(entry.get("target_id"))
        if target_id is None:
            continue
        links.append(BoxLink(title=remap_title(str(entry.get("label", ""))), target_id=target_id))
    return links


def decode_linked_sideposts(raw: Optional[str]) -> List[BoxLink]:
    """
    Decode a ``docs_linkedSideposts`` value into ordered box links.

    Args:
        raw: The stored meta value (PHP-serialized or versioned JSON)

    Returns:
        BoxLink list in stored order, legacy titles remapped; [] when the
        value is empty or cannot be decoded
    """
    if not raw:
        return []
    raw = raw.strip()
    try:
        if raw.startswith("{"):
            return _decode_json(raw)
        return _decode_php(raw)
    except ValueError as exc:
        logger.warning(f"Cannot decode linked sideposts: {exc}")
        return []
