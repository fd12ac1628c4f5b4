"""EntityAdapter contract: per-kind translation between models and wire objects."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import UnionType
from typing import TYPE_CHECKING, Any, ClassVar, Union, get_args, get_origin

from pydantic import BaseModel

from .identity import ServiceScopedId, parse_composite_id

if TYPE_CHECKING:
    from .api import ApiClient


class Secret:
    """Marks a write-only model field; use as ``Annotated[str, Secret()]``.

    The remote API never echoes these values back, so the coordinator carries
    them forward from the prior model after every successful call.
    """

    def __repr__(self) -> str:
        return "Secret()"


def _model_type(annotation: Any) -> type[BaseModel] | None:
    candidates = (annotation,)
    if get_origin(annotation) in (Union, UnionType):
        candidates = get_args(annotation)
    for candidate in candidates:
        if isinstance(candidate, type) and issubclass(candidate, BaseModel):
            return candidate
    return None


def secret_fields(model_type: type[BaseModel]) -> dict[str, Any]:
    """Map secret field names to ``True``, and nested models to their own secret map.

    The result is shaped for ``model_dump(exclude=...)``. Nested models are
    followed through optional fields.
    """
    found: dict[str, Any] = {}
    for name, info in model_type.model_fields.items():
        if any(isinstance(m, Secret) for m in info.metadata):
            found[name] = True
        elif (nested := _model_type(info.annotation)) is not None:
            if inner := secret_fields(nested):
                found[name] = inner
    return found


def _overlay(prior: Any, current: BaseModel, fields: dict[str, Any]) -> BaseModel:
    update = {}
    for name, inner in fields.items():
        if inner is True:
            update[name] = getattr(prior, name)
            continue
        prior_value = getattr(prior, name, None)
        current_value = getattr(current, name)
        if isinstance(prior_value, BaseModel) and isinstance(current_value, BaseModel):
            update[name] = _overlay(prior_value, current_value, inner)
    return current.model_copy(update=update) if update else current


class EntityAdapter[M: BaseModel, W: BaseModel, I](ABC):
    """Translation and remote-call capability set for one entity kind.

    Type parameters are the declarative model ``M``, the wire object ``W`` and
    the identity ``I`` (a bare ``str`` or a composite key).

    Subclasses hold no business logic. ``resource_to_obj`` and
    ``obj_to_resource`` raise ConversionError for combinations they cannot
    express and never return partial output. ``get_id`` is pure.
    """

    kind: ClassVar[str]
    model_type: ClassVar[type[BaseModel]]

    supports_update: ClassVar[bool] = True
    create_via_update: ClassVar[bool] = False

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    # -- Remote operations --

    @abstractmethod
    def create(self, obj: W) -> W:
        """Create the entity remotely and return the stored object."""

    @abstractmethod
    def read(self, identity: I) -> W:
        """Fetch the entity; raises NotFoundError when it no longer exists."""

    def update(self, obj: W) -> W:
        """Replace the entity remotely and return the stored object."""
        raise NotImplementedError(f"{self.kind} does not support update")

    @abstractmethod
    def delete(self, identity: I) -> None:
        """Delete the entity remotely."""

    # -- Translation --

    @abstractmethod
    def get_id(self, model: M) -> I: ...

    @abstractmethod
    def resource_to_obj(self, model: M) -> W: ...

    @abstractmethod
    def obj_to_resource(self, obj: W) -> M: ...

    def is_addressable(self, model: M) -> bool:
        """True if the model carries enough identity to reach the remote entity."""
        return bool(getattr(model, "id", ""))

    def import_model(self, raw_id: str) -> M:
        """Build an identity-only model from an external identifier."""
        return self.model_type.model_construct(id=raw_id)  # type: ignore[return-value]

    # -- Secret handling --

    def overlay_secrets(self, prior: M, current: M) -> M:
        """Carry write-only values from the prior model onto a converted one."""
        fields = secret_fields(type(current))
        if not fields:
            return current
        return _overlay(prior, current, fields)  # type: ignore[return-value]

    def redact(self, model: M) -> dict[str, Any]:
        """Dump a model for logging with secret fields left out, nested ones included."""
        return model.model_dump(exclude=secret_fields(type(model)))


class ServiceScopedAdapter[M: BaseModel, W: BaseModel](EntityAdapter[M, W, ServiceScopedId]):
    """Adapter for entities addressed by (service, id)."""

    def get_id(self, model: M) -> ServiceScopedId:
        return ServiceScopedId(service=model.service, id=model.id)  # type: ignore[attr-defined]

    def is_addressable(self, model: M) -> bool:
        return bool(model.service and model.id)  # type: ignore[attr-defined]

    def import_model(self, raw_id: str) -> M:
        identity = parse_composite_id(raw_id)
        return self.model_type.model_construct(  # type: ignore[return-value]
            service=identity.service, id=identity.id
        )
