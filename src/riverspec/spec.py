"""Specification ABC and spec registration."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .context import Context

_spec_registry: dict[str, type] = {}


def spec(name: str):
    """Register a Specification class as an HCL block decoder."""

    def decorator(cls):
        _spec_registry[name] = cls
        return cls

    return decorator


def registered_specs() -> dict[str, type]:
    """Return a snapshot of the registered spec types by block name."""
    return dict(_spec_registry)


class Specification[P](ABC):
    """Desired state of one managed entity."""

    @abstractmethod
    def equals(self, ctx: Context[P]) -> bool:
        """Current state matches desired state."""

    def exists(self, ctx: Context[P]) -> bool:
        """Entity exists remotely (defaults to equals)."""
        return self.equals(ctx)

    @abstractmethod
    def apply(self, ctx: Context[P]) -> None:
        """Create or update the entity."""

    @abstractmethod
    def remove(self, ctx: Context[P]) -> None:
        """Delete the entity."""
