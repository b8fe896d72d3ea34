"""
Monte Carlo Tree Search nodes for NoGo.

This module defines the SearchNode class, one vertex of the search tree, and
the SearchTree arena that owns every node of one search. Nodes refer to their
parent and children by index into the arena, so the tree has a single owner
and is released in one piece when the search that built it is discarded.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from nogo_ai.core.actions import PlaceAction
from nogo_ai.core.constants import PieceType


@dataclass
class SearchNode:
    """
    A node in the Monte Carlo Tree Search.

    ``mover`` made ``action`` to reach this node, so the side to move here is
    ``mover.opponent``. ``total_reward`` counts the playouts through this
    node that were credited as wins.
    """
    index: int
    mover: PieceType
    action: Optional[PlaceAction] = None
    parent: Optional[int] = None
    visits: int = 0
    total_reward: int = 0
    children: List[int] = field(default_factory=list)

    def is_unvisited(self) -> bool:
        return self.visits == 0

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def win_rate(self) -> float:
        """Average reward, 0.0 for an unvisited node."""
        return self.total_reward / self.visits if self.visits else 0.0

    def __str__(self) -> str:
        return (f"SearchNode(index={self.index}, "
                f"mover={self.mover.name}, "
                f"action={self.action}, "
                f"visits={self.visits}, "
                f"reward={self.total_reward}, "
                f"children={len(self.children)})")


class SearchTree:
    """
    Arena holding all nodes of one search.

    The root lives at index 0. Nodes are only ever added, through
    ``add_child``; the whole tree is dropped together once the search has
    picked its move.
    """

    def __init__(self, root_mover: PieceType):
        """
        Create a tree with a single root node.

        Args:
            root_mover: Side that made the move leading to the root position,
                i.e. the opponent of the searching side
        """
        self.nodes: List[SearchNode] = [SearchNode(index=0, mover=root_mover)]

    @property
    def root(self) -> SearchNode:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> SearchNode:
        return self.nodes[index]

    def __iter__(self) -> Iterator[SearchNode]:
        return iter(self.nodes)

    def add_child(self, parent: SearchNode, action: PlaceAction, mover: PieceType) -> SearchNode:
        """
        Create a new child of ``parent``.

        Args:
            parent: Node to attach the child to
            action: Placement that leads from the parent to the child
            mover: Side making that placement

        Returns:
            The new child node
        """
        child = SearchNode(index=len(self.nodes), mover=mover, action=action, parent=parent.index)
        self.nodes.append(child)
        parent.children.append(child.index)
        return child

    def children_of(self, node: SearchNode) -> List[SearchNode]:
        return [self.nodes[index] for index in node.children]

    def parent_of(self, node: SearchNode) -> Optional[SearchNode]:
        return self.nodes[node.parent] if node.parent is not None else None

    def path_to_root(self, node: SearchNode) -> Iterator[SearchNode]:
        """Yield ``node`` and then each ancestor up to and including the root."""
        current: Optional[SearchNode] = node
        while current is not None:
            yield current
            current = self.parent_of(current)

    def depth_of(self, node: SearchNode) -> int:
        """Number of edges between ``node`` and the root."""
        return sum(1 for _ in self.path_to_root(node)) - 1
