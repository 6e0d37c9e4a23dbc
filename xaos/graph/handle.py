"""Handles — the Python face of a graph node.

A `ProtoObject` wraps a `Node`. Attribute and item access resolve members
by walking the parent chain; assignment always writes the node's own
members. Function members come back bound to the handle they were looked
up through, so a member defined on an ancestor runs with the descendant as
its receiver.
"""

from __future__ import annotations

from types import FunctionType, MethodType
from typing import Any, Iterator

from xaos.graph.models import MISSING, Node


class ProtoObject:
    """A handle onto a node of the prototype graph.

    Handles are references: copying one, shallow or deep, gives another
    handle on the same node. Use `clone()` to derive a new object.
    """

    __slots__ = ("_node", "__weakref__")

    def __init__(self, node: Node):
        object.__setattr__(self, "_node", node)

    # ── Member access ───────────────────────────────────────────────

    def __getattr__(self, name: str) -> Any:
        if name in ProtoObject.__slots__ or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        value = self._node.resolve(name)
        if value is MISSING:
            raise AttributeError(f"{self!r} has no member '{name}'")
        return bind(value, self)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ProtoObject.__slots__:
            raise AttributeError(f"'{name}' is reserved on {type(self).__name__}")
        with self._node.arena.lock:
            self._node.members[name] = value

    def __delattr__(self, name: str) -> None:
        with self._node.arena.lock:
            if name not in self._node.members:
                raise AttributeError(f"{self!r} has no own member '{name}'")
            del self._node.members[name]

    def __getitem__(self, key: Any) -> Any:
        value = self._node.resolve(key)
        if value is MISSING:
            raise KeyError(key)
        return bind(value, self)

    def __setitem__(self, key: Any, value: Any) -> None:
        with self._node.arena.lock:
            self._node.members[key] = value

    def __delitem__(self, key: Any) -> None:
        with self._node.arena.lock:
            del self._node.members[key]

    def __contains__(self, key: Any) -> bool:
        return self._node.resolve(key) is not MISSING

    def __copy__(self) -> ProtoObject:
        return ProtoObject(self._node)

    def __deepcopy__(self, memo: dict) -> ProtoObject:
        return ProtoObject(self._node)

    # ── Identity ────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ProtoObject):
            return self._node is other._node
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._node)

    def __repr__(self) -> str:
        node = self._node
        if node.anonymous:
            return f"<ProtoObject #{node.id} anonymous of #{node.owner_id}>"
        if node.label:
            return f"<ProtoObject #{node.id} {node.label!r}>"
        return f"<ProtoObject #{node.id}>"

    def __dir__(self) -> list[str]:
        names: set[str] = set()
        for node in self._node.chain():
            names.update(k for k in node.members if isinstance(k, str))
        return sorted(names)


def bind(value: Any, receiver: ProtoObject) -> Any:
    """Bind function members to `receiver`; pass everything else through.

    Objects have no class of their own, so a `classmethod` binds to the
    receiver just like a plain function.
    """
    if isinstance(value, staticmethod):
        return value.__func__
    if isinstance(value, classmethod):
        return MethodType(value.__func__, receiver)
    if isinstance(value, FunctionType):
        return MethodType(value, receiver)
    return value


def wrap(node: Node) -> ProtoObject:
    return ProtoObject(node)


def node_of(obj: ProtoObject) -> Node:
    if not isinstance(obj, ProtoObject):
        raise TypeError(f"Expected a ProtoObject, got {type(obj).__name__}")
    return object.__getattribute__(obj, "_node")


# ── Introspection ───────────────────────────────────────────────────


def has_own(obj: ProtoObject, name: Any) -> bool:
    """True if `name` is set directly on `obj` rather than inherited."""
    return name in node_of(obj).members


def own_members(obj: ProtoObject) -> dict[Any, Any]:
    """A snapshot of the members set directly on `obj`, in insertion order."""
    return dict(node_of(obj).members)


def lookup(obj: ProtoObject, name: Any, default: Any = None) -> Any:
    value = node_of(obj).resolve(name)
    if value is MISSING:
        return default
    return bind(value, obj)


def parent_of(obj: ProtoObject) -> ProtoObject | None:
    parent = node_of(obj).parent
    return wrap(parent) if parent is not None else None


def ancestors(obj: ProtoObject) -> Iterator[ProtoObject]:
    """Yield every ancestor of `obj`, nearest first, anonymous layers included."""
    node = node_of(obj).parent
    while node is not None:
        yield wrap(node)
        node = node.parent


def is_anonymous(obj: ProtoObject) -> bool:
    return node_of(obj).anonymous
