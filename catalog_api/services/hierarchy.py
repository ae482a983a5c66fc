# catalog_api/services/hierarchy.py
from typing import Optional, Set
from uuid import UUID


class CycleDetector:
    """Checks that reparenting a category keeps the category graph a forest"""

    def __init__(self, category_repo):
        self.category_repo = category_repo

    async def would_cycle(self, category_id: UUID, proposed_parent_id: UUID) -> bool:
        """
        Whether making proposed_parent_id the parent of category_id would make
        category_id its own ancestor.

        Walks up from the proposed parent, one store read per step. Worst case
        is the depth of the tree.
        """
        if proposed_parent_id == category_id:
            return True

        visited: Set[UUID] = set()
        current_id: Optional[UUID] = proposed_parent_id
        while current_id is not None:
            if current_id == category_id:
                return True
            if current_id in visited:
                # stored chain loops without reaching category_id
                return False
            visited.add(current_id)

            parent = await self.category_repo.get_by_id(current_id)
            current_id = parent.parent_id if parent else None

        return False
