"""Health monitor: periodic availability probe for a service URL."""

from __future__ import annotations

from pydantic import BaseModel

from ..adapter import ServiceScopedAdapter
from ..api.models import HealthMonitor
from ..identity import ServiceScopedId
from ..managed import ManagedSpec
from ..spec import spec


class HealthMonitorModel(BaseModel):
    id: str = ""
    service: str
    name: str
    url: str
    enabled: bool = True


class HealthMonitorAdapter(ServiceScopedAdapter[HealthMonitorModel, HealthMonitor]):
    kind = "health_monitor"
    model_type = HealthMonitorModel

    def create(self, obj: HealthMonitor) -> HealthMonitor:
        return self.client.create(f"services/{obj.service}/health-monitors/", obj)

    def read(self, identity: ServiceScopedId) -> HealthMonitor:
        return self.client.get(
            f"services/{identity.service}/health-monitors/{identity.id}/", HealthMonitor
        )

    def update(self, obj: HealthMonitor) -> HealthMonitor:
        return self.client.update(f"services/{obj.service}/health-monitors/{obj.id}/", obj)

    def delete(self, identity: ServiceScopedId) -> None:
        self.client.delete(f"services/{identity.service}/health-monitors/{identity.id}/")

    def resource_to_obj(self, model: HealthMonitorModel) -> HealthMonitor:
        return HealthMonitor.model_validate(model.model_dump())

    def obj_to_resource(self, obj: HealthMonitor) -> HealthMonitorModel:
        return HealthMonitorModel.model_validate(obj.model_dump())


@spec("health_monitor")
class HealthMonitorSpec(ManagedSpec[HealthMonitorModel]):
    adapter_type = HealthMonitorAdapter
