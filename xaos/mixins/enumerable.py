"""Enumerable — collection behavior derived from a single `each()` primitive.

Usage:

    obj.include(Enumerable)

or:

    Collection = Xaos.extend(lambda public: public.include(Enumerable))

    def each(self, visit):
        for item in self.items:
            visit(item)
        return self

    Collection.each = each

The default `each()` visits the receiver's own members as `(name, value)`.
Every other operation only talks to `each()`, so overriding it is enough
to make a new kind of collection.

An element is the single value passed to the visitor, or the tuple of all
values when the visitor receives more than one.
"""

from __future__ import annotations

from typing import Any, Callable

from xaos.core.library import Xaos
from xaos.graph.handle import ProtoObject, own_members


def _to_value(args: tuple) -> Any:
    return args[0] if len(args) == 1 else args


def _each(self, func: Callable) -> ProtoObject:
    for name, value in own_members(self).items():
        func(name, value)
    return self


def _map(self, func: Callable) -> list:
    result: list = []
    self.each(lambda *args: result.append(func(*args)))
    return result


def _inject(self, initial: Any, func: Callable) -> Any:
    acc = initial

    def visit(*args):
        nonlocal acc
        acc = func(acc, _to_value(args))

    self.each(visit)
    return acc


def _select(self, func: Callable) -> list:
    return self.inject([], lambda found, element: found + [element] if func(element) else found)


def _first(self) -> Any:
    found: list = []

    def visit(*args):
        if not found:
            found.append(_to_value(args))

    self.each(visit)
    return found[0] if found else None


def _last(self) -> Any:
    # Always a full traversal; `each` may have side effects callers rely on
    last = None

    def visit(*args):
        nonlocal last
        last = _to_value(args)

    self.each(visit)
    return last


def _define(public: ProtoObject) -> None:
    public.each = _each
    public.map = _map
    public.inject = _inject
    public.select = _select
    public.first = _first
    public.last = _last


Enumerable = Xaos.extend(_define)
