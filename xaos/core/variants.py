"""Variant configuration — the policy switches that tell Xaos and Proto apart.

Both libraries share one object algebra. A `VariantConfig` names the
differences explicitly: how `include` reacts to a foreign receiver, whether
clones get a private store or a `singleton` handle on their layer, and
which optional operations the public root exposes. Variants can also be defined in YAML and loaded at runtime.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path

import yaml

from xaos.errors import VariantConfigError

logger = logging.getLogger(__name__)


class IncludePolicy(Enum):
    """What a layer-bound `include` does when called with a foreign receiver."""

    STRICT = "strict"  # Raise OwnershipError
    RETARGET = "retarget"  # Write to the receiver's own layer instead


@dataclass(frozen=True)
class VariantConfig:
    """Settings for one library variant."""

    name: str
    include_policy: IncludePolicy = IncludePolicy.STRICT
    private_store: bool = False  # Give every clone layer a `private` dict
    singleton_ref: bool = False  # Let every clone reach its layer as `singleton`
    alias_method_chain: bool = False
    expose_merge: bool = False
    extend_accepts_mapping: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["include_policy"] = self.include_policy.value
        return data


XAOS_VARIANT = VariantConfig(
    name="xaos",
    include_policy=IncludePolicy.STRICT,
    private_store=True,
    alias_method_chain=True,
)

PROTO_VARIANT = VariantConfig(
    name="proto",
    include_policy=IncludePolicy.RETARGET,
    singleton_ref=True,
    expose_merge=True,
    extend_accepts_mapping=True,
)

BUILTIN_VARIANTS = {v.name: v for v in (XAOS_VARIANT, PROTO_VARIANT)}

NAME_PATTERN = r"^[a-z][a-z0-9_-]*$"
BOOLEAN_FIELDS = (
    "private_store",
    "singleton_ref",
    "alias_method_chain",
    "expose_merge",
    "extend_accepts_mapping",
)
VALID_POLICIES = {p.value for p in IncludePolicy}


def get_variant(name: str) -> VariantConfig:
    try:
        return BUILTIN_VARIANTS[name]
    except KeyError:
        raise KeyError(
            f"Unknown variant '{name}'. Built-in variants: {sorted(BUILTIN_VARIANTS)}"
        ) from None


def validate_variant(data: object) -> list[str]:
    """Check a parsed variant definition.

    Returns a list of issues found. Empty list means valid.
    """
    if not isinstance(data, dict) or "variant" not in data:
        return ["Missing top-level 'variant' key"]

    definition = data["variant"]
    if not isinstance(definition, dict):
        return ["'variant' must be a mapping"]

    issues: list[str] = []

    name = definition.get("name")
    if not name:
        issues.append("Variant missing required field: name")
    elif not isinstance(name, str) or not re.match(NAME_PATTERN, name):
        issues.append(f"Variant name '{name}' does not match pattern '{NAME_PATTERN}'")

    policy = definition.get("include_policy", IncludePolicy.STRICT.value)
    if not isinstance(policy, str) or policy not in VALID_POLICIES:
        issues.append(f"Invalid include_policy '{policy}'. Must be one of: {sorted(VALID_POLICIES)}")

    for field_name in BOOLEAN_FIELDS:
        if field_name in definition and not isinstance(definition[field_name], bool):
            issues.append(f"Field '{field_name}' must be a boolean")

    known = {"name", "include_policy", *BOOLEAN_FIELDS}
    for key in definition:
        if key not in known:
            issues.append(f"Unknown field '{key}'")

    return issues


def variant_from_dict(data: dict) -> VariantConfig:
    """Build a `VariantConfig` from a parsed definition, raising on any issue."""
    issues = validate_variant(data)
    if issues:
        raise VariantConfigError(issues)

    definition = data["variant"]
    return VariantConfig(
        name=definition["name"],
        include_policy=IncludePolicy(definition.get("include_policy", IncludePolicy.STRICT.value)),
        **{f: definition[f] for f in BOOLEAN_FIELDS if f in definition},
    )


def load_variant(path: str | Path) -> VariantConfig:
    """Load a variant definition from a YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f)

    variant = variant_from_dict(data)
    logger.debug("Loaded variant '%s' from %s", variant.name, path)
    return variant
