"""Certificate: managed, self-managed, or external TLS certificates."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

from ..adapter import EntityAdapter, Secret
from ..api.models import Certificate, CertificateType, ProviderCertificate
from ..errors import ConversionError
from ..managed import ManagedSpec
from ..spec import spec


class ProviderCertificateModel(BaseModel):
    account_provider: str
    provider_certificate_id: str
    not_valid_after: str = ""


class CertificateModel(BaseModel):
    id: str = ""
    name: str
    type: str
    cn: str = ""
    not_valid_after: str = ""
    certificate: Annotated[str, Secret()] = Field(default="", repr=False)
    private_key: Annotated[str, Secret()] = Field(default="", repr=False)
    certificate_chain: Annotated[str, Secret()] = Field(default="", repr=False)
    challenges: str = ""
    status: str = ""
    providers_certificates: list[ProviderCertificateModel] = Field(default_factory=list)


class CertificateAdapter(EntityAdapter[CertificateModel, Certificate, str]):
    kind = "certificate"
    model_type = CertificateModel

    def create(self, obj: Certificate) -> Certificate:
        created = self.client.create("certificates/", obj)
        # challenges are filled in by an async task after creation
        return self.read(created.id)

    def read(self, identity: str) -> Certificate:
        return self.client.get(f"certificates/{identity}/", Certificate)

    def update(self, obj: Certificate) -> Certificate:
        return self.client.update(f"certificates/{obj.id}/", obj)

    def delete(self, identity: str) -> None:
        self.client.delete(f"certificates/{identity}/")

    def get_id(self, model: CertificateModel) -> str:
        return model.id

    def resource_to_obj(self, model: CertificateModel) -> Certificate:
        try:
            cert_type = CertificateType(model.type)
        except ValueError:
            allowed = ", ".join(t.value for t in CertificateType)
            raise ConversionError(
                f"unknown certificate type {model.type!r} (expected one of {allowed})"
            ) from None

        if cert_type is CertificateType.EXTERNAL and not model.providers_certificates:
            raise ConversionError("EXTERNAL certificates require providers_certificates")

        return Certificate(
            id=model.id,
            name=model.name,
            type=cert_type,
            cn=model.cn,
            certificate=model.certificate,
            private_key=model.private_key,
            certificate_chain=model.certificate_chain,
            providers_certificates=[
                ProviderCertificate(
                    account_provider=pc.account_provider,
                    provider_certificate_id=pc.provider_certificate_id,
                )
                for pc in model.providers_certificates
            ],
        )

    def obj_to_resource(self, obj: Certificate) -> CertificateModel:
        # providers certificates are only meaningful for EXTERNAL certificates
        providers: list[ProviderCertificateModel] = []
        if obj.type is CertificateType.EXTERNAL:
            providers = [
                ProviderCertificateModel(
                    account_provider=pc.account_provider,
                    provider_certificate_id=pc.provider_certificate_id,
                    not_valid_after=pc.not_valid_after,
                )
                for pc in obj.providers_certificates
            ]

        return CertificateModel(
            id=obj.id,
            name=obj.name,
            type=obj.type.value,
            cn=obj.cn,
            not_valid_after=obj.not_valid_after,
            challenges=obj.challenges,
            status=obj.status,
            providers_certificates=providers,
        )

    def overlay_secrets(self, prior: CertificateModel, current: CertificateModel) -> CertificateModel:
        # only self-managed certificates carry user-supplied key material
        if current.type != CertificateType.SELF_MANAGED:
            return current
        return super().overlay_secrets(prior, current)


@spec("certificate")
class CertificateSpec(ManagedSpec[CertificateModel]):
    adapter_type = CertificateAdapter
