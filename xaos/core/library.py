"""Library roots — the public `Xaos` and `Proto` objects.

Each library root is itself a clone of a bare base node, with the variant's
operations stored as its own members. Everything cloned from a root
inherits those operations.
"""

from __future__ import annotations

import logging

from xaos.core.algebra import build_operations, clone_object
from xaos.core.variants import PROTO_VARIANT, XAOS_VARIANT, VariantConfig
from xaos.graph.handle import ProtoObject, node_of, wrap
from xaos.graph.models import Arena, default_arena

logger = logging.getLogger(__name__)


def blank(arena: Arena | None = None, label: str = "") -> ProtoObject:
    """A bare root object: no members, no parent, no operations."""
    if arena is None:
        arena = default_arena()
    return wrap(arena.new_node(label=label))


def build_library(config: VariantConfig, arena: Arena | None = None) -> ProtoObject:
    """Build the public root object for a variant."""
    base = blank(arena, label="object")
    public = clone_object(base, config)

    node = node_of(public)
    with node.arena.lock:
        node.label = config.name.capitalize()
        node.members.update(build_operations(config))

    logger.debug(
        "Built library '%s' on arena '%s' (root #%d)", config.name, node.arena.name, node.id
    )
    return public


Xaos = build_library(XAOS_VARIANT)
Proto = build_library(PROTO_VARIANT)

LIBRARIES = {XAOS_VARIANT.name: Xaos, PROTO_VARIANT.name: Proto}
