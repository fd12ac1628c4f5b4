"""Origin: the upstream a service fetches content from."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

from ..adapter import Secret, ServiceScopedAdapter
from ..api.models import Origin
from ..errors import ConversionError
from ..identity import ServiceScopedId
from ..managed import ManagedSpec
from ..spec import spec

PROTOCOLS = ("HTTP", "HTTPS")

# managed through origin_shield, never written by the origin itself
SHIELD_FIELDS = {"shield_location", "shield_providers"}


class S3CredentialsModel(BaseModel):
    access_key: Annotated[str, Secret()] = Field(repr=False)
    secret_key: Annotated[str, Secret()] = Field(repr=False)


class PrivateS3BucketModel(BaseModel):
    bucket_name: str
    bucket_region: str
    credentials: S3CredentialsModel


class OriginModel(BaseModel):
    id: str = ""
    service: str
    host: str
    protocol: str = "HTTPS"
    https_port: int = 443
    http_port: int = 80
    path: str = ""
    is_s3: bool = False
    private_s3: PrivateS3BucketModel | None = None
    timeout_ms: int = 0
    verify_tls: bool = True


def origin_path(service: str, origin_id: str = "") -> str:
    if origin_id:
        return f"services/{service}/origins/{origin_id}/"
    return f"services/{service}/origins/"


class OriginAdapter(ServiceScopedAdapter[OriginModel, Origin]):
    kind = "origin"
    model_type = OriginModel

    def create(self, obj: Origin) -> Origin:
        return self.client.create(origin_path(obj.service), obj, exclude=SHIELD_FIELDS)

    def read(self, identity: ServiceScopedId) -> Origin:
        return self.client.get(origin_path(identity.service, identity.id), Origin)

    def update(self, obj: Origin) -> Origin:
        return self.client.update(origin_path(obj.service, obj.id), obj, exclude=SHIELD_FIELDS)

    def delete(self, identity: ServiceScopedId) -> None:
        self.client.delete(origin_path(identity.service, identity.id))

    def resource_to_obj(self, model: OriginModel) -> Origin:
        if model.protocol not in PROTOCOLS:
            raise ConversionError(f"unknown origin protocol {model.protocol!r}")
        if model.private_s3 is not None and not model.is_s3:
            raise ConversionError("private_s3 can only be set when is_s3 is true")

        obj = Origin(
            id=model.id,
            service=model.service,
            host=model.host,
            protocol=model.protocol,
            https_port=model.https_port,
            http_port=model.http_port,
            path=model.path,
            is_s3=model.is_s3,
            timeout_ms=model.timeout_ms,
            verify_tls=model.verify_tls,
        )
        if model.private_s3 is not None:
            s3 = model.private_s3
            obj.is_private_s3 = True
            obj.s3_bucket_name = s3.bucket_name
            obj.s3_aws_region = s3.bucket_region
            obj.s3_aws_key = s3.credentials.access_key
            obj.s3_aws_secret = s3.credentials.secret_key
        return obj

    def obj_to_resource(self, obj: Origin) -> OriginModel:
        private_s3 = None
        if obj.is_private_s3:
            private_s3 = PrivateS3BucketModel(
                bucket_name=obj.s3_bucket_name,
                bucket_region=obj.s3_aws_region,
                credentials=S3CredentialsModel(
                    access_key=obj.s3_aws_key,
                    secret_key=obj.s3_aws_secret,
                ),
            )

        return OriginModel(
            id=obj.id,
            service=obj.service,
            host=obj.host,
            protocol=obj.protocol,
            https_port=obj.https_port,
            http_port=obj.http_port,
            path=obj.path,
            is_s3=obj.is_s3,
            private_s3=private_s3,
            timeout_ms=obj.timeout_ms,
            verify_tls=obj.verify_tls,
        )


@spec("origin")
class OriginSpec(ManagedSpec[OriginModel]):
    adapter_type = OriginAdapter
    natural_key = "host"
