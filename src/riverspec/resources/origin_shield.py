"""Origin shield: shield settings stored on an existing origin.

A shield has no identity of its own: it is addressed by its origin, created
by updating the origin, and deleted by clearing the origin's shield fields.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..adapter import ServiceScopedAdapter
from ..api.models import Origin, OriginShieldLocation, OriginShieldProvider
from ..errors import NotFoundError, RemoteError
from ..identity import ServiceScopedId, parse_composite_id
from ..managed import ManagedSpec
from ..spec import spec
from .origin import origin_path


class ShieldLocationModel(BaseModel):
    country: str
    subdivision: str = ""


class OriginShieldModel(BaseModel):
    id: str = ""
    service: str
    origin: str
    shield_location: ShieldLocationModel | None = None
    shield_providers: list[str] = Field(default_factory=list)
    provider_locations: dict[str, str] = Field(default_factory=dict)


def _has_shield(origin: Origin) -> bool:
    return origin.shield_location is not None or bool(origin.shield_providers)


class OriginShieldAdapter(ServiceScopedAdapter[OriginShieldModel, Origin]):
    kind = "origin_shield"
    model_type = OriginShieldModel
    create_via_update = True

    def create(self, obj: Origin) -> Origin:
        raise RemoteError("origin shields are created by updating their origin")

    def read(self, identity: ServiceScopedId) -> Origin:
        origin = self.client.get(origin_path(identity.service, identity.id), Origin)
        if not _has_shield(origin):
            raise NotFoundError(f"origin {identity.id} has no shield configured")
        return origin

    def update(self, obj: Origin) -> Origin:
        path = origin_path(obj.service, obj.id)
        origin = self.client.get(path, Origin)
        origin = origin.model_copy(
            update={
                "shield_location": obj.shield_location,
                "shield_providers": obj.shield_providers,
            }
        )
        return self.client.update(path, origin)

    def delete(self, identity: ServiceScopedId) -> None:
        path = origin_path(identity.service, identity.id)
        origin = self.client.get(path, Origin)
        origin = origin.model_copy(update={"shield_location": None, "shield_providers": []})
        self.client.update(path, origin)

    def get_id(self, model: OriginShieldModel) -> ServiceScopedId:
        return ServiceScopedId(service=model.service, id=model.origin)

    def is_addressable(self, model: OriginShieldModel) -> bool:
        return bool(model.service and model.origin)

    def import_model(self, raw_id: str) -> OriginShieldModel:
        identity = parse_composite_id(raw_id)
        return OriginShieldModel.model_construct(
            id=identity.id, service=identity.service, origin=identity.id
        )

    def resource_to_obj(self, model: OriginShieldModel) -> Origin:
        location = None
        if model.shield_location is not None:
            location = OriginShieldLocation(
                country=model.shield_location.country,
                subdivision=model.shield_location.subdivision,
            )
        return Origin(
            id=model.origin,
            service=model.service,
            shield_location=location,
            shield_providers=[OriginShieldProvider(service_provider=p) for p in model.shield_providers],
        )

    def obj_to_resource(self, obj: Origin) -> OriginShieldModel:
        location = None
        if obj.shield_location is not None:
            location = ShieldLocationModel(
                country=obj.shield_location.country,
                subdivision=obj.shield_location.subdivision,
            )
        return OriginShieldModel(
            id=obj.id,
            service=obj.service,
            origin=obj.id,
            shield_location=location,
            shield_providers=[p.service_provider for p in obj.shield_providers],
            provider_locations={p.service_provider: p.provider_location for p in obj.shield_providers},
        )


@spec("origin_shield")
class OriginShieldSpec(ManagedSpec[OriginShieldModel]):
    adapter_type = OriginShieldAdapter
    natural_key = "origin"
