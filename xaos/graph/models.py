"""Graph data models — nodes and the arena that owns their ids.

A node never owns its parent; it only refers to it. The arena keeps weak
references, so a node lives exactly as long as something (a handle, a child
node, a member value) still refers to it.
"""

from __future__ import annotations

import itertools
import threading
import weakref
from dataclasses import dataclass, field
from typing import Any, Iterator

MISSING = object()


@dataclass(eq=False)
class Node:
    """A single node in the prototype graph."""

    id: int
    arena: Arena
    parent: Node | None = None
    members: dict[Any, Any] = field(default_factory=dict)

    # Anonymous ancestors hold mixed-in members for the clone that owns them
    anonymous: bool = False
    owner_id: int | None = None

    label: str = ""

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def chain(self) -> Iterator[Node]:
        """Yield this node, then each ancestor up to the root."""
        node: Node | None = self
        while node is not None:
            yield node
            node = node.parent

    def resolve(self, name: Any, default: Any = MISSING) -> Any:
        """Walk the parent chain for `name`; return `default` if unresolved."""
        for node in self.chain():
            if name in node.members:
                return node.members[name]
        return default

    def owns_layer(self, layer: Node) -> bool:
        return layer.anonymous and layer.owner_id == self.id

    @property
    def own_layer(self) -> Node | None:
        """The anonymous ancestor inserted when this node was cloned, if any."""
        if self.parent is not None and self.owns_layer(self.parent):
            return self.parent
        return None

    def depth(self) -> int:
        return sum(1 for _ in self.chain()) - 1


class Arena:
    """Allocates node ids and serialises structural mutations.

    Nodes are tracked weakly: dropping the last reference to a node removes
    it from the arena.
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self.lock = threading.RLock()
        self._ids = itertools.count(1)
        self._nodes: weakref.WeakValueDictionary[int, Node] = weakref.WeakValueDictionary()

    def new_node(
        self,
        parent: Node | None = None,
        *,
        anonymous: bool = False,
        owner_id: int | None = None,
        label: str = "",
    ) -> Node:
        if parent is not None and parent.arena is not self:
            raise ValueError(
                f"Parent node {parent.id} belongs to arena '{parent.arena.name}', not '{self.name}'"
            )
        with self.lock:
            node = Node(
                id=next(self._ids),
                arena=self,
                parent=parent,
                anonymous=anonymous,
                owner_id=owner_id,
                label=label,
            )
            self._nodes[node.id] = node
        return node

    def get(self, node_id: int) -> Node | None:
        return self._nodes.get(node_id)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __repr__(self) -> str:
        return f"Arena(name={self.name!r}, live_nodes={len(self)})"


_default_arena = Arena()


def default_arena() -> Arena:
    """The arena shared by the built-in Xaos and Proto libraries."""
    return _default_arena
