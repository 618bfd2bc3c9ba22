from __future__ import annotations
from typing import Dict, Optional


class VisitedIndex:
    """Serialized state -> move string of the first (shortest) path reaching it.

    Entries are never overwritten: with a layered BFS the first insertion is
    already the shortest.
    """
    def __init__(self) -> None:
        self._paths: Dict[str, str] = {}

    def add(self, key: str, path: str) -> bool:
        if key in self._paths:
            return False
        self._paths[key] = path
        return True

    def path(self, key: str) -> Optional[str]:
        return self._paths.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._paths

    def __len__(self) -> int:
        return len(self._paths)
