"""Wire objects as the management API serializes them."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class WireObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = ""


class Service(WireObject):
    name: str = ""
    description: str = ""
    certificate: str = ""


class CertificateType(StrEnum):
    MANAGED = "MANAGED"
    SELF_MANAGED = "SELF_MANAGED"
    EXTERNAL = "EXTERNAL"


class ProviderCertificate(BaseModel):
    account_provider: str
    provider_certificate_id: str
    not_valid_after: str = ""


class Certificate(WireObject):
    name: str = ""
    type: CertificateType = CertificateType.MANAGED
    cn: str = ""
    not_valid_after: str = ""
    certificate: str = Field(default="", repr=False)
    private_key: str = Field(default="", repr=False)
    certificate_chain: str = Field(default="", repr=False)
    challenges: str = ""
    status: str = ""
    providers_certificates: list[ProviderCertificate] = Field(default_factory=list)


class DomainMapping(BaseModel):
    path_pattern: str = "/*"
    target_id: str
    target_type: str = "LOAD_BALANCER"


class Domain(WireObject):
    service: str = ""
    domain: str = ""
    aliases: list[str] = Field(default_factory=list)
    mappings: list[DomainMapping] = Field(default_factory=list)


class OriginShieldLocation(BaseModel):
    country: str
    subdivision: str = ""


class OriginShieldProvider(BaseModel):
    service_provider: str
    provider_location: str = ""


class Origin(WireObject):
    service: str = ""
    host: str = ""
    protocol: str = "HTTPS"
    https_port: int = 443
    http_port: int = 80
    path: str = ""
    is_s3: bool = False
    is_private_s3: bool = False
    s3_bucket_name: str = ""
    s3_aws_region: str = ""
    s3_aws_key: str = Field(default="", repr=False)
    s3_aws_secret: str = Field(default="", repr=False)
    timeout_ms: int = 0
    verify_tls: bool = True
    shield_location: OriginShieldLocation | None = None
    shield_providers: list[OriginShieldProvider] = Field(default_factory=list)


class UrlSigningKey(WireObject):
    service: str = ""
    name: str = ""
    public_key: str = Field(default="", repr=False)
    encryption_key: str = Field(default="", repr=False)
    provider_keys: dict[str, str] = Field(default_factory=dict)


class HealthMonitor(WireObject):
    service: str = ""
    name: str = ""
    url: str = ""
    enabled: bool = True
