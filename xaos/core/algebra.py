"""Object algebra — clone, include, create, extend and ancestry queries.

Every operation takes its receiver first. `build_operations` closes them
over a `VariantConfig` and returns plain functions, which the library root
stores as members; member lookup then binds them to whichever descendant
they are called on.

Chain shape after `clone()`:

    new object -> anonymous layer -> receiver

The anonymous layer holds `prototype` and `include` (bound to that layer).
Variants with a private store add `private`. Variants with a singleton
reference add `singleton`, a handle on the layer itself. Members mixed in
through `include` land on the layer, so they never show up as own members
of the clone.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from xaos.core.variants import IncludePolicy, VariantConfig
from xaos.errors import InvalidModuleError, MissingMemberError, OwnershipError
from xaos.graph.handle import ProtoObject, lookup, node_of, own_members, wrap
from xaos.graph.models import MISSING, Node

logger = logging.getLogger(__name__)


# ── Modules ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class MixinModule:
    """A module for `extend()`: members to include, then an optional body.

    Use this instead of a bare callable when the new object should receive
    a bag of members before the body runs.
    """

    members: Any
    body: Callable[[ProtoObject], Any] | None = None


def mixin_module(members: Any) -> Callable[[Callable], MixinModule]:
    """Decorator form of `MixinModule`.

        @mixin_module({"greeting": "hello"})
        def Greeter(self):
            self.name = "greeter"
    """

    def decorator(body: Callable[[ProtoObject], Any]) -> MixinModule:
        return MixinModule(members=members, body=body)

    return decorator


@dataclass(frozen=True)
class MethodChain:
    """Both halves of an aliased method, wired together at definition time.

    `original` keeps serving under `<name>_without_<tag>`; `decorated`
    takes over `<name>` and is expected to call the original itself.
    """

    name: str
    tag: str
    original: Callable
    decorated: Callable

    @property
    def without_name(self) -> str:
        return f"{self.name}_without_{self.tag}"

    @property
    def with_name(self) -> str:
        return f"{self.name}_with_{self.tag}"

    def members(self) -> dict[str, Callable]:
        return {self.without_name: self.original, self.name: self.decorated}

    @classmethod
    def resolve(cls, node: Node, name: str, tag: str) -> MethodChain:
        """Pick both halves off the chain of `node`."""
        with_name = f"{name}_with_{tag}"
        original = node.resolve(name)
        if original is MISSING:
            raise MissingMemberError(f"Cannot chain '{name}': no such member")
        decorated = node.resolve(with_name)
        if decorated is MISSING:
            raise MissingMemberError(f"Cannot chain '{name}': '{with_name}' is not defined")
        return cls(name=name, tag=tag, original=original, decorated=decorated)


# ── Member merging ──────────────────────────────────────────────────


def mixin_members(source: Any, names: tuple = ()) -> dict[Any, Any]:
    """Collect the members a mixin source contributes, filtered by `names`.

    A source is another object (its own members), a mapping, or any Python
    object with a `__dict__` (dunder names skipped).
    """
    if isinstance(source, ProtoObject):
        members = own_members(source)
    elif isinstance(source, Mapping):
        members = dict(source)
    elif hasattr(source, "__dict__"):
        members = {
            k: v for k, v in vars(source).items() if not (k.startswith("__") and k.endswith("__"))
        }
    else:
        raise InvalidModuleError(f"Cannot mix in members from {type(source).__name__}")

    if names:
        return {k: v for k, v in members.items() if k in names}
    return members


def merge_members(target: Node, source: Any, names: tuple = ()) -> Node:
    members = mixin_members(source, names)
    with target.arena.lock:
        target.members.update(members)
    logger.debug("Merged %d member(s) into node #%d", len(members), target.id)
    return target


def _layer_include(layer: Node, config: VariantConfig) -> Callable:
    """Build the `include` member bound to one anonymous layer."""

    def include(self, source, *names):
        receiver = node_of(self)
        if receiver.owns_layer(layer):
            target = layer
        elif config.include_policy is IncludePolicy.STRICT:
            raise OwnershipError(
                f"include() is bound to the layer of #{layer.owner_id}, not #{receiver.id}",
                owner_id=layer.owner_id,
                receiver_id=receiver.id,
            )
        else:
            target = receiver.own_layer if receiver.own_layer is not None else receiver
            logger.warning(
                "include() bound to the layer of #%s retargeted to node #%d",
                layer.owner_id,
                target.id,
            )
        merge_members(target, source, names)
        return self

    return include


# ── Operations ──────────────────────────────────────────────────────


def clone_object(receiver: ProtoObject, config: VariantConfig) -> ProtoObject:
    """Return a new object inheriting from `receiver` through an anonymous layer."""
    parent = node_of(receiver)
    arena = parent.arena
    with arena.lock:
        layer = arena.new_node(parent, anonymous=True)
        node = arena.new_node(layer)
        layer.owner_id = node.id
        layer.members["prototype"] = receiver
        if config.private_store:
            layer.members["private"] = {}
        if config.singleton_ref:
            layer.members["singleton"] = wrap(layer)
        layer.members["include"] = _layer_include(layer, config)
    logger.debug("Cloned #%d -> #%d (layer #%d)", parent.id, node.id, layer.id)
    return wrap(node)


def create_object(receiver: ProtoObject, config: VariantConfig, *args, **kwargs) -> ProtoObject:
    """Clone `receiver` and run `initialize(*args, **kwargs)` on the clone if it has one."""
    obj = clone_object(receiver, config)
    initialize = lookup(obj, "initialize")
    if callable(initialize):
        initialize(*args, **kwargs)
    return obj


def extend_object(receiver: ProtoObject, config: VariantConfig, module: Any, *names) -> Any:
    """Clone `receiver` and let `module` define the clone's behavior.

    Returns the clone, or whatever the module body returned if that is not
    None.
    """
    if isinstance(module, MixinModule):
        members, body = module.members, module.body
    elif callable(module):
        members, body = None, module
    elif config.extend_accepts_mapping and isinstance(module, (Mapping, ProtoObject)):
        obj = clone_object(receiver, config)
        merge_members(node_of(obj), module, names)
        return obj
    else:
        raise InvalidModuleError(
            f"Expected extend() to be given a callable or MixinModule, got {type(module).__name__}"
        )

    if names:
        raise InvalidModuleError("extend() only accepts member names together with a mapping")

    obj = clone_object(receiver, config)
    if members is not None:
        merge_members(node_of(obj).own_layer, members)

    result = body(obj) if body is not None else None
    logger.debug("Extended #%d (body returned %s)", node_of(obj).id, type(result).__name__)
    return obj if result is None else result


def is_descendant(receiver: ProtoObject, other: Any) -> bool:
    """True if `other` is `receiver` or appears on its parent chain."""
    if not isinstance(other, ProtoObject):
        return False
    target = node_of(other)
    return any(node is target for node in node_of(receiver).chain())


def is_ancestor(receiver: ProtoObject, other: Any) -> bool:
    if not isinstance(other, ProtoObject):
        return False
    return is_descendant(other, receiver)


def chain_method(receiver: ProtoObject, name: str, tag: str) -> ProtoObject:
    """Move `name` to `<name>_without_<tag>` and promote `<name>_with_<tag>` to `name`."""
    node = node_of(receiver)
    chain = MethodChain.resolve(node, name, tag)
    with node.arena.lock:
        node.members.update(chain.members())
    logger.debug("Chained '%s' with '%s' on node #%d", name, tag, node.id)
    return receiver


def merge_object(receiver: ProtoObject, source: Any, *names) -> ProtoObject:
    """Copy members from `source` straight onto `receiver`."""
    merge_members(node_of(receiver), source, names)
    return receiver


def build_operations(config: VariantConfig) -> dict[str, Callable]:
    """The public operations of one variant, ready to be stored as members."""

    def clone(self):
        return clone_object(self, config)

    def create(self, *args, **kwargs):
        return create_object(self, config, *args, **kwargs)

    def extend(self, module, *names):
        return extend_object(self, config, module, *names)

    def descendant_of(self, other):
        return is_descendant(self, other)

    def ancestor_of(self, other):
        return is_ancestor(self, other)

    ops: dict[str, Callable] = {
        "clone": clone,
        "create": create,
        "extend": extend,
        "descendant_of": descendant_of,
        "ancestor_of": ancestor_of,
    }

    if config.alias_method_chain:

        def alias_method_chain(self, name, tag):
            return chain_method(self, name, tag)

        ops["alias_method_chain"] = alias_method_chain

    if config.expose_merge:

        def merge(self, source, *names):
            return merge_object(self, source, *names)

        ops["merge"] = merge

    return ops
