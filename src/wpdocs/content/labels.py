"""Label resolution for pages and translations.

Rows come from a join with the short-title meta, so one page can appear on
several rows. The rule: a non-empty short title beats the base title, and
the first short title seen wins.
"""

from typing import Dict, Generic, Hashable, List, Optional, TypeVar

K = TypeVar("K", bound=Hashable)


class LabelResolver(Generic[K]):
    """Collect labelled entries in first-seen order, deduplicating by key."""

    def __init__(self) -> None:
        self._ids: Dict[K, int] = {}
        self._labels: Dict[K, str] = {}
        self._from_short_title: Dict[K, bool] = {}

    def add(self, key: K, entry_id: int, title: Optional[str], short_title: Optional[str]) -> None:
        if key not in self._ids:
            self._ids[key] = entry_id

        if short_title:
            if not self._from_short_title.get(key):
                self._labels[key] = short_title
                self._from_short_title[key] = True
        elif key not in self._labels:
            self._labels[key] = title or ""

    def keys(self) -> List[K]:
        return list(self._ids)

    def id_of(self, key: K) -> int:
        return self._ids[key]

    def label_of(self, key: K) -> str:
        return self._labels.get(key, "")

    def __len__(self) -> int:
        return len(self._ids)
