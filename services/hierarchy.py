"""Tree legality checks and path materialization for categories.

Everything here works on a snapshot of categories passed in by the caller
and never mutates it.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
from models.category import Category

REASON_SELF_PARENT = "self-parent"
REASON_CYCLE = "would create a cycle"
REASON_PARENT_NOT_FOUND = "parent not found"


@dataclass(frozen=True)
class ParentCheck:
    """Outcome of a parent assignment check."""

    ok: bool
    reason: Optional[str] = None


def _index(categories: Iterable[Category]) -> Dict[int, Category]:
    if isinstance(categories, dict):
        return categories
    return {c.id: c for c in categories}


class HierarchyValidator:
    """Decides whether a category may be moved under a proposed parent."""

    @staticmethod
    def can_set_parent(
        categories: Iterable[Category],
        category_id: Optional[int],
        proposed_parent_id: Optional[int],
    ) -> ParentCheck:
        """Check whether category_id may take proposed_parent_id as its parent.

        Rules, in order:
        1. No parent (move to root) is always legal.
        2. A category cannot be its own parent.
        3. The proposed parent must exist.
        4. The proposed parent must not be a descendant of the category,
           i.e. its path must not contain category_id.

        Re-assigning the current parent passes all rules and is a no-op.

        Args:
            categories: Current categories, as a list or an id -> Category dict.
            category_id: The category being placed. None for a category that
                does not exist yet.
            proposed_parent_id: The requested parent, or None for root.

        Returns:
            ParentCheck with ok=True, or ok=False and a reason.
        """
        if proposed_parent_id is None:
            return ParentCheck(ok=True)

        if category_id is not None and proposed_parent_id == category_id:
            return ParentCheck(ok=False, reason=REASON_SELF_PARENT)

        by_id = _index(categories)
        parent = by_id.get(proposed_parent_id)
        if parent is None:
            return ParentCheck(ok=False, reason=REASON_PARENT_NOT_FOUND)

        if category_id is not None and category_id in parent.path:
            return ParentCheck(ok=False, reason=REASON_CYCLE)

        return ParentCheck(ok=True)

    @staticmethod
    def build_path(parent: Optional[Category]) -> List[int]:
        """Path for a child of parent: parent's path plus the parent itself."""
        if parent is None:
            return []
        return list(parent.path) + [parent.id]

    @staticmethod
    def find_descendants(
        categories: Iterable[Category], category_id: int
    ) -> List[Category]:
        """All descendants of category_id, breadth first (parents before children).

        Walks parent_id links rather than trusting stored paths, so it is safe
        to use while paths are being rewritten.
        """
        children_by_parent: Dict[int, List[Category]] = {}
        for category in _index(categories).values():
            if category.parent_id is not None:
                children_by_parent.setdefault(category.parent_id, []).append(category)

        result = []
        seen = {category_id}
        queue = [category_id]
        while queue:
            current = queue.pop(0)
            for child in children_by_parent.get(current, []):
                if child.id in seen:
                    continue
                seen.add(child.id)
                result.append(child)
                queue.append(child.id)
        return result
