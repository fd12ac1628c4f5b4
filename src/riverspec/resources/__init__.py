"""Managed entity kinds; importing this package registers their specs."""

from .certificate import CertificateAdapter as CertificateAdapter
from .certificate import CertificateSpec as CertificateSpec
from .domain import DomainAdapter as DomainAdapter
from .domain import DomainSpec as DomainSpec
from .health_monitor import HealthMonitorAdapter as HealthMonitorAdapter
from .health_monitor import HealthMonitorSpec as HealthMonitorSpec
from .origin import OriginAdapter as OriginAdapter
from .origin import OriginSpec as OriginSpec
from .origin_shield import OriginShieldAdapter as OriginShieldAdapter
from .origin_shield import OriginShieldSpec as OriginShieldSpec
from .service import ServiceAdapter as ServiceAdapter
from .service import ServiceSpec as ServiceSpec
from .url_signing_key import UrlSigningKeyAdapter as UrlSigningKeyAdapter
from .url_signing_key import UrlSigningKeySpec as UrlSigningKeySpec
