"""URL signing key: key pair used to sign and verify private URLs."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

from ..adapter import Secret, ServiceScopedAdapter
from ..api.models import UrlSigningKey
from ..identity import ServiceScopedId
from ..managed import ManagedSpec
from ..spec import spec


class UrlSigningKeyModel(BaseModel):
    id: str = ""
    service: str
    name: str
    public_key: Annotated[str, Secret()] = Field(default="", repr=False)
    encryption_key: Annotated[str, Secret()] = Field(default="", repr=False)
    provider_keys: dict[str, str] = Field(default_factory=dict)


class UrlSigningKeyAdapter(ServiceScopedAdapter[UrlSigningKeyModel, UrlSigningKey]):
    kind = "url_signing_key"
    model_type = UrlSigningKeyModel

    def create(self, obj: UrlSigningKey) -> UrlSigningKey:
        return self.client.create(f"services/{obj.service}/url-signing-keys/", obj)

    def read(self, identity: ServiceScopedId) -> UrlSigningKey:
        return self.client.get(
            f"services/{identity.service}/url-signing-keys/{identity.id}/", UrlSigningKey
        )

    def update(self, obj: UrlSigningKey) -> UrlSigningKey:
        return self.client.update(f"services/{obj.service}/url-signing-keys/{obj.id}/", obj)

    def delete(self, identity: ServiceScopedId) -> None:
        self.client.delete(f"services/{identity.service}/url-signing-keys/{identity.id}/")

    def resource_to_obj(self, model: UrlSigningKeyModel) -> UrlSigningKey:
        return UrlSigningKey(
            id=model.id,
            service=model.service,
            name=model.name,
            public_key=model.public_key,
            encryption_key=model.encryption_key,
        )

    def obj_to_resource(self, obj: UrlSigningKey) -> UrlSigningKeyModel:
        return UrlSigningKeyModel(
            id=obj.id,
            service=obj.service,
            name=obj.name,
            provider_keys=dict(obj.provider_keys),
        )


@spec("url_signing_key")
class UrlSigningKeySpec(ManagedSpec[UrlSigningKeyModel]):
    adapter_type = UrlSigningKeyAdapter
