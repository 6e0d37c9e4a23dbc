"""Exceptions raised by the object algebra and variant loader."""

from __future__ import annotations


class XaosError(Exception):
    """Base class for all Xaos errors."""


class InvalidModuleError(XaosError, TypeError):
    """An argument cannot be used as a module or mixin source."""


class OwnershipError(XaosError, RuntimeError):
    """A layer-bound operation was invoked with a receiver that does not own the layer."""

    def __init__(self, message: str, owner_id: int | None = None, receiver_id: int | None = None):
        super().__init__(message)
        self.owner_id = owner_id
        self.receiver_id = receiver_id


class MissingMemberError(XaosError, AttributeError):
    """A member required by an operation cannot be resolved on the receiver."""


class VariantConfigError(XaosError, ValueError):
    """A variant definition failed validation."""

    def __init__(self, issues: list[str]):
        self.issues = issues
        super().__init__("Invalid variant definition: " + "; ".join(issues))
