"""Transient selection state: cell keys (active layer), mark ids and object ids."""
from dataclasses import dataclass, field
from typing import Set


@dataclass
class Selection:
    cell_keys: Set[str] = field(default_factory=set)
    mark_ids: Set[str] = field(default_factory=set)
    object_ids: Set[str] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not (self.cell_keys or self.mark_ids or self.object_ids)

    def has_free_items(self) -> bool:
        """True if any mark or object is selected."""
        return bool(self.mark_ids or self.object_ids)

    def count(self) -> int:
        return len(self.cell_keys) + len(self.mark_ids) + len(self.object_ids)

    def clear(self) -> None:
        self.cell_keys.clear()
        self.mark_ids.clear()
        self.object_ids.clear()

    def copy(self) -> 'Selection':
        return Selection(set(self.cell_keys), set(self.mark_ids), set(self.object_ids))

    def discard_mark(self, mark_id: str) -> None:
        self.mark_ids.discard(mark_id)

    def discard_object(self, obj_id: str) -> None:
        self.object_ids.discard(obj_id)

    def discard_cell(self, key: str) -> None:
        self.cell_keys.discard(key)
