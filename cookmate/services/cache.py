from __future__ import annotations

from typing import Dict, Optional

from cookmate.core.models import RecipeRecord


class RecipeCache:
    """In-memory recipe details keyed by the name the client asked for.

    Shared by every request of one app instance. No eviction; the last write
    for a name wins.
    """

    def __init__(self) -> None:
        self._items: Dict[str, RecipeRecord] = {}

    def get(self, name: str) -> Optional[RecipeRecord]:
        return self._items.get(name)

    def get_full(self, name: str) -> Optional[RecipeRecord]:
        """Cached record for ``name`` unless it is only a detected-name placeholder."""
        record = self._items.get(name)
        if record is None or record.is_placeholder():
            return None
        return record

    def set(self, name: str, record: RecipeRecord) -> None:
        self._items[name] = record

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items
