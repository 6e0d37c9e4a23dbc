"""Xaos — a prototype-based object system with mixins.

Objects are cloned from other objects rather than instantiated from
classes. Two library variants share one object algebra:

- `Xaos`: strict `include`, a private store per clone, `alias_method_chain`
- `Proto`: `include` retargets foreign receivers, plus `merge` and mapping `extend`
"""

__version__ = "0.1.0"

from xaos.core.algebra import MethodChain, MixinModule, mixin_module
from xaos.core.library import Proto, Xaos, blank, build_library
from xaos.core.variants import (
    PROTO_VARIANT,
    XAOS_VARIANT,
    IncludePolicy,
    VariantConfig,
    load_variant,
)
from xaos.errors import (
    InvalidModuleError,
    MissingMemberError,
    OwnershipError,
    VariantConfigError,
    XaosError,
)
from xaos.graph.handle import ProtoObject, ancestors, has_own, lookup, own_members, parent_of
from xaos.graph.models import Arena
from xaos.mixins.enumerable import Enumerable

__all__ = [
    "Arena",
    "Enumerable",
    "IncludePolicy",
    "InvalidModuleError",
    "MethodChain",
    "MissingMemberError",
    "MixinModule",
    "OwnershipError",
    "PROTO_VARIANT",
    "Proto",
    "ProtoObject",
    "VariantConfig",
    "VariantConfigError",
    "XAOS_VARIANT",
    "Xaos",
    "XaosError",
    "ancestors",
    "blank",
    "build_library",
    "has_own",
    "load_variant",
    "lookup",
    "mixin_module",
    "own_members",
    "parent_of",
]
