"""ManagedSpec: a Specification backed by the lifecycle coordinator."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel

from .adapter import EntityAdapter
from .context import Context
from .errors import LifecycleError
from .lifecycle import LifecycleCoordinator, Response
from .resolve import Resolver, has_refs
from .spec import Specification

logger = logging.getLogger(__name__)


class ManagedSpec[M: BaseModel](Specification[Any]):
    """Desired state of one remote entity.

    Attributes are kept as written and resolved against the context on use, so
    they may reference recorded state (``${service.web.id}``). Each spec is
    addressed in state as ``<kind>.<label>``; the label defaults to the value
    of ``natural_key``.
    """

    adapter_type: ClassVar[type[EntityAdapter[Any, Any, Any]]]
    natural_key: ClassVar[str] = "name"

    def __init__(self, label: str | None = None, **attrs: Any) -> None:
        model_type = self.adapter_type.model_type
        unknown = set(attrs) - set(model_type.model_fields)
        if unknown:
            raise ValueError(f"{self.kind}: unknown attribute(s): {', '.join(sorted(unknown))}")

        if label is None:
            key = attrs.get(self.natural_key)
            if not isinstance(key, str) or not key or has_refs(key):
                raise ValueError(
                    f"{self.kind}: 'label' is required when '{self.natural_key}' is not a literal string"
                )
            label = key

        if not has_refs(attrs):
            model_type(**attrs)

        self.label = label
        self.attrs = attrs
        self._cache: tuple[Context, M | None] | None = None

    @property
    def kind(self) -> str:
        return self.adapter_type.kind

    @property
    def address(self) -> str:
        return f"{self.kind}.{self.label}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address})"

    # -- Plumbing --

    def _adapter(self, ctx: Context) -> EntityAdapter[M, Any, Any]:
        if ctx.provider is None:
            raise RuntimeError(f"{self.address}: no provider configured")
        return ctx.provider.adapter(self.adapter_type)

    def _coordinator(self, ctx: Context) -> LifecycleCoordinator:
        if ctx.provider is None:
            raise RuntimeError(f"{self.address}: no provider configured")
        return ctx.provider.coordinator

    def desired(self, ctx: Context) -> M:
        """Build the desired model with all references resolved."""
        attrs = Resolver(ctx.references()).resolve(self.attrs)
        return self.adapter_type.model_type(**attrs)  # type: ignore[return-value]

    def _tracked(self, ctx: Context) -> M | None:
        """Model addressing the remote entity, from state or explicit identity."""
        model_type = self.adapter_type.model_type
        if self.address in ctx.state:
            return model_type.model_validate(ctx.state[self.address])  # type: ignore[return-value]
        try:
            desired = self.desired(ctx)
        except ValueError as exc:
            # references to entities that have not been created yet
            logger.debug("%s cannot be resolved yet: %s", self.address, exc)
            return None
        if self._adapter(ctx).is_addressable(desired):
            return desired
        return None

    def _check(self, resp: Response[M]) -> None:
        if resp.tainted:
            logger.error("%s may have changed remotely; import it to recover its state", self.address)
        if resp.diagnostics.has_error():
            raise LifecycleError(resp.diagnostics)

    def current(self, ctx: Context) -> M | None:
        """Read the entity's remote state; None if it does not exist."""
        if self._cache is not None and self._cache[0] is ctx:
            return self._cache[1]

        tracked = self._tracked(ctx)
        if tracked is None:
            logger.debug("%s is not tracked", self.address)
            self._cache = (ctx, None)
            return None

        resp: Response[M] = Response()
        model = self._coordinator(ctx).read(self._adapter(ctx), tracked, resp)
        self._check(resp)

        if resp.removed:
            if self.address in ctx.state:
                logger.warning("%s was deleted remotely; dropping it from state", self.address)
                if not ctx.dry_run:
                    ctx.state.forget(self.address)
                    ctx.state.save()
        elif model is not None and not ctx.dry_run:
            ctx.state.record(self.address, model)
            ctx.state.save()

        self._cache = (ctx, model)
        return model

    # -- Specification --

    def equals(self, ctx: Context) -> bool:
        current = self.current(ctx)
        if current is None:
            return False
        desired = self.desired(ctx)
        changed = [
            name
            for name in sorted(desired.model_fields_set)
            if getattr(desired, name) != getattr(current, name)
        ]
        if changed:
            logger.debug("%s differs in: %s", self.address, ", ".join(changed))
        return not changed

    def exists(self, ctx: Context) -> bool:
        return self.current(ctx) is not None

    def apply(self, ctx: Context) -> None:
        adapter = self._adapter(ctx)
        coordinator = self._coordinator(ctx)
        desired = self.desired(ctx)
        current = self.current(ctx)

        resp: Response[M] = Response()
        if current is None:
            result = coordinator.create(adapter, desired, resp)
        else:
            explicit = {name: getattr(desired, name) for name in desired.model_fields_set}
            result = coordinator.update(adapter, current.model_copy(update=explicit), resp)

        self._cache = None
        if result is not None:
            ctx.state.record(self.address, result)
            ctx.state.save()
        self._check(resp)

    def remove(self, ctx: Context) -> None:
        current = self.current(ctx)
        if current is None:
            logger.debug("%s already gone", self.address)
            return

        resp: Response[M] = Response()
        self._coordinator(ctx).delete(self._adapter(ctx), current, resp)
        self._cache = None
        if not resp.diagnostics.has_error():
            ctx.state.forget(self.address)
            ctx.state.save()
        self._check(resp)

    @classmethod
    def import_(cls, ctx: Context, label: str, raw_id: str) -> M:
        """Adopt an existing remote entity into state under the given label."""
        if ctx.provider is None:
            raise RuntimeError("no provider configured")
        adapter = ctx.provider.adapter(cls.adapter_type)
        resp: Response[M] = Response()
        model = ctx.provider.coordinator.import_(adapter, raw_id, resp)
        if resp.diagnostics.has_error() or model is None:
            raise LifecycleError(resp.diagnostics)

        address = f"{adapter.kind}.{label}"
        ctx.state.record(address, model)
        ctx.state.save()
        logger.info("Imported %s as %s", raw_id, address)
        return model
