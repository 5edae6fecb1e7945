"""
Association graph for the LTO Chain Indexer.

An association is a directed edge parent -> child between two addresses. Each
edge is stored twice, in the parent's children set and in the child's parents
set, and both sets are always written together.

Revoking an association also revokes every association that was granted
further down through the child, so removal cascades over all descendants.
"""

import logging

from ltoindexer.core.secure_logging import sanitize_for_log
from ltoindexer.storage.storage_service import StorageService

logger = logging.getLogger(__name__)


class AssociationGraph:
    """Maintains the mirrored parent/child adjacency sets"""

    def __init__(self, storage: StorageService):
        self.storage = storage

    async def add_association(self, parent: str, child: str) -> None:
        await self.storage.save_association(parent, child)
        logger.debug(f"association: added {sanitize_for_log(parent)} -> {sanitize_for_log(child)}")

    async def remove_association(self, parent: str, child: str) -> int:
        """
        Remove parent -> child and cascade over every descendant of child.

        The traversal uses an explicit stack instead of recursion. An address is
        expanded at most once, and the revoking parent is never expanded, so the
        walk terminates even if the stored graph contains a cycle.

        Returns:
            Number of edges removed, including parent -> child
        """
        await self.storage.remove_association_pair(parent, child)
        removed = 1

        visited = {parent, child}
        stack = [child]

        while stack:
            address = stack.pop()
            for descendant in await self.storage.get_association_children(address):
                await self.storage.remove_association_pair(address, descendant)
                removed += 1
                logger.debug(f"association: removed {sanitize_for_log(address)} -> {sanitize_for_log(descendant)}")

                if descendant in visited:
                    logger.debug(f"association: {sanitize_for_log(descendant)} already visited")
                    continue
                visited.add(descendant)
                stack.append(descendant)

        logger.debug(f"association: removed {sanitize_for_log(parent)} -> {sanitize_for_log(child)} ({removed} edges)")
        return removed

    async def get_associations(self, address: str) -> dict[str, list[str]]:
        return await self.storage.get_associations(address)
