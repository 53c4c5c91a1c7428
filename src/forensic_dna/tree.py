"""
Binary search tree of DNA profiles keyed by "Last, First" names.

This module provides:
- The tree node type and the duplicate-name policy
- Insertion and deletion without rebalancing
- The interest-flagging scan against the evidence sequences
- Counting and level-order enumeration of flagged/unflagged profiles

All traversals use explicit worklists, so trees built from sorted input
(one long chain) are handled without hitting the recursion limit.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterator, List, Optional, Tuple

from .evidence import EvidenceContext
from .exceptions import DuplicateProfileError
from .logging_config import time_it
from .profile import Profile

logger = logging.getLogger(__name__)


class DuplicatePolicy(str, Enum):
    """What ``ProfileStore.insert`` does with a name already in the tree."""
    REPLACE = "replace"
    REJECT = "reject"


@dataclass(eq=False)
class TreeNode:
    """One person in the tree; children are ``None`` when the subtree is empty."""
    name: str
    profile: Profile
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None


class ProfileStore:
    """Keyed ordered store of profiles plus the evidence they are matched against."""

    def __init__(
        self,
        first_evidence: Optional[str] = None,
        second_evidence: Optional[str] = None,
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.REPLACE,
    ) -> None:
        self._root: Optional[TreeNode] = None
        self.evidence = EvidenceContext(first_evidence, second_evidence)
        self.duplicate_policy = DuplicatePolicy(duplicate_policy)

    # Accessors

    @property
    def root(self) -> Optional[TreeNode]:
        return self._root

    @root.setter
    def root(self, node: Optional[TreeNode]) -> None:
        self._root = node

    @property
    def first_evidence(self) -> Optional[str]:
        return self.evidence.first

    @first_evidence.setter
    def first_evidence(self, sequence: Optional[str]) -> None:
        self.evidence.first = sequence

    @property
    def second_evidence(self) -> Optional[str]:
        return self.evidence.second

    @second_evidence.setter
    def second_evidence(self, sequence: Optional[str]) -> None:
        self.evidence.second = sequence

    # Insertion and lookup

    def insert(self, name: str, profile: Profile) -> None:
        """Insert ``profile`` under ``name`` by plain BST descent.

        Raises:
            DuplicateProfileError: If ``name`` is present and the store
                uses ``DuplicatePolicy.REJECT``.
        """
        if self._root is None:
            self._root = TreeNode(name, profile)
            logger.debug(f"Inserted {name!r} as root")
            return

        node = self._root
        while True:
            if name == node.name:
                if self.duplicate_policy is DuplicatePolicy.REJECT:
                    raise DuplicateProfileError(
                        f"Profile already exists: {name}", {"name": name}
                    )
                logger.warning(f"Replacing existing profile for {name!r}")
                node.profile = profile
                return
            if name < node.name:
                if node.left is None:
                    node.left = TreeNode(name, profile)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = TreeNode(name, profile)
                    break
                node = node.right
        logger.debug(f"Inserted {name!r} under {node.name!r}")

    def _find(self, name: str) -> Tuple[Optional[TreeNode], Optional[TreeNode]]:
        """Return ``(node, parent)`` for ``name``; ``node`` is None when absent."""
        parent = None
        node = self._root
        while node is not None and node.name != name:
            parent = node
            node = node.left if name < node.name else node.right
        return node, parent

    def get(self, name: str) -> Optional[Profile]:
        """Profile stored under ``name``, or None when absent."""
        node, _ = self._find(name)
        return node.profile if node is not None else None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._find(name)[0] is not None

    # Deletion

    def remove(self, name: str) -> bool:
        """Delete the node keyed ``name``; absent names leave the tree untouched.

        A node with two children keeps its place in the tree and takes the
        name and profile of its in-order successor, which is then unlinked
        from the right subtree.

        Returns:
            True if a node was removed.
        """
        node, parent = self._find(name)
        if node is None:
            logger.debug(f"Remove skipped, {name!r} not found")
            return False

        if node.left is not None and node.right is not None:
            successor_parent = node
            successor = node.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left

            node.name = successor.name
            node.profile = successor.profile

            # successor has no left child
            if successor_parent is node:
                successor_parent.right = successor.right
            else:
                successor_parent.left = successor.right
        else:
            child = node.left if node.left is not None else node.right
            if parent is None:
                self._root = child
            elif parent.left is node:
                parent.left = child
            else:
                parent.right = child

        logger.debug(f"Removed {name!r}")
        return True

    @time_it("prune unmarked profiles")
    def prune_unmarked(self) -> List[str]:
        """Remove every profile that is not flagged of interest.

        The names are collected before the first removal because each
        removal may move payloads between nodes.

        Returns:
            The removed names, in level order.
        """
        doomed = self.list_unmarked()
        for name in doomed:
            self.remove(name)
        logger.info(f"Pruned {len(doomed)} unmarked profiles, {len(self)} remain")
        return doomed

    # Traversals

    def _pre_order(self) -> Iterator[TreeNode]:
        stack: List[TreeNode] = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def _level_order(self) -> Iterator[TreeNode]:
        if self._root is None:
            return
        queue: Deque[TreeNode] = deque([self._root])
        while queue:
            node = queue.popleft()
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
            yield node

    def _in_order(self) -> Iterator[TreeNode]:
        stack: List[TreeNode] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def __iter__(self) -> Iterator[str]:
        return (node.name for node in self._in_order())

    def __len__(self) -> int:
        return sum(1 for _ in self._pre_order())

    def in_order(self) -> List[str]:
        return list(self)

    def items(self) -> List[Tuple[str, Profile]]:
        return [(node.name, node.profile) for node in self._in_order()]

    def height(self) -> int:
        """Number of levels in the tree; 0 when empty."""
        levels = 0
        frontier = [self._root] if self._root is not None else []
        while frontier:
            levels += 1
            frontier = [
                child
                for node in frontier
                for child in (node.left, node.right)
                if child is not None
            ]
        return levels

    # Flagging and queries

    @time_it("flag profiles of interest")
    def flag_profiles_of_interest(self) -> int:
        """Flag every profile whose STR counts match the combined evidence.

        Profiles are visited in pre-order. A flag already set is never
        cleared.

        Returns:
            Number of profiles flagged by this call that were not flagged before.
        """
        sequence = self.evidence.combined
        newly_flagged = 0
        for node in self._pre_order():
            profile = node.profile
            if profile.is_match(sequence) and not profile.interest_flag:
                profile.interest_flag = True
                newly_flagged += 1
                logger.debug(f"Flagged {node.name!r} as of interest")
        logger.info(f"Flagged {newly_flagged} new profiles of interest")
        return newly_flagged

    def count_by_status(self, is_of_interest: bool) -> int:
        """Count profiles whose interest flag equals ``is_of_interest``."""
        return sum(
            1 for node in self._pre_order()
            if node.profile.interest_flag == is_of_interest
        )

    def list_unmarked(self) -> List[str]:
        """Names of unflagged profiles in level order, left child before right."""
        return [
            node.name for node in self._level_order()
            if not node.profile.interest_flag
        ]
