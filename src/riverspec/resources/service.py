"""Service: the top-level container every other entity hangs off."""

from __future__ import annotations

from pydantic import BaseModel

from ..adapter import EntityAdapter
from ..api.models import Service
from ..managed import ManagedSpec
from ..spec import spec


class ServiceModel(BaseModel):
    id: str = ""
    name: str
    description: str = ""
    certificate: str = ""


class ServiceAdapter(EntityAdapter[ServiceModel, Service, str]):
    kind = "service"
    model_type = ServiceModel

    def create(self, obj: Service) -> Service:
        return self.client.create("services/", obj)

    def read(self, identity: str) -> Service:
        return self.client.get(f"services/{identity}/", Service)

    def update(self, obj: Service) -> Service:
        return self.client.update(f"services/{obj.id}/", obj)

    def delete(self, identity: str) -> None:
        self.client.delete(f"services/{identity}/")

    def get_id(self, model: ServiceModel) -> str:
        return model.id

    def resource_to_obj(self, model: ServiceModel) -> Service:
        return Service(
            id=model.id,
            name=model.name,
            description=model.description,
            certificate=model.certificate,
        )

    def obj_to_resource(self, obj: Service) -> ServiceModel:
        return ServiceModel(
            id=obj.id,
            name=obj.name,
            description=obj.description,
            certificate=obj.certificate,
        )


@spec("service")
class ServiceSpec(ManagedSpec[ServiceModel]):
    adapter_type = ServiceAdapter
