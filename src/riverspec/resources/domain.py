"""Domain: a hostname served by a service, with path-based mappings."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..adapter import ServiceScopedAdapter
from ..api.models import Domain, DomainMapping
from ..identity import ServiceScopedId
from ..managed import ManagedSpec
from ..spec import spec


class DomainMappingModel(BaseModel):
    path_pattern: str = "/*"
    target_id: str
    target_type: str = "LOAD_BALANCER"


class DomainModel(BaseModel):
    id: str = ""
    service: str
    domain: str
    aliases: list[str] = Field(default_factory=list)
    mappings: list[DomainMappingModel] = Field(default_factory=list)


class DomainAdapter(ServiceScopedAdapter[DomainModel, Domain]):
    kind = "domain"
    model_type = DomainModel

    def create(self, obj: Domain) -> Domain:
        return self.client.create(f"services/{obj.service}/domains/", obj)

    def read(self, identity: ServiceScopedId) -> Domain:
        return self.client.get(f"services/{identity.service}/domains/{identity.id}/", Domain)

    def update(self, obj: Domain) -> Domain:
        return self.client.update(f"services/{obj.service}/domains/{obj.id}/", obj)

    def delete(self, identity: ServiceScopedId) -> None:
        self.client.delete(f"services/{identity.service}/domains/{identity.id}/")

    def resource_to_obj(self, model: DomainModel) -> Domain:
        return Domain(
            id=model.id,
            service=model.service,
            domain=model.domain,
            aliases=list(model.aliases),
            mappings=[
                DomainMapping(
                    path_pattern=m.path_pattern,
                    target_id=m.target_id,
                    target_type=m.target_type,
                )
                for m in model.mappings
            ],
        )

    def obj_to_resource(self, obj: Domain) -> DomainModel:
        return DomainModel(
            id=obj.id,
            service=obj.service,
            domain=obj.domain,
            aliases=list(obj.aliases),
            mappings=[
                DomainMappingModel(
                    path_pattern=m.path_pattern,
                    target_id=m.target_id,
                    target_type=m.target_type,
                )
                for m in obj.mappings
            ],
        )


@spec("domain")
class DomainSpec(ManagedSpec[DomainModel]):
    adapter_type = DomainAdapter
    natural_key = "domain"
