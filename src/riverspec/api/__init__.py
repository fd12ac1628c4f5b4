"""Client for the CDN management API."""

from .client import DEFAULT_ENDPOINT as DEFAULT_ENDPOINT
from .client import ApiClient as ApiClient
from .client import raise_for_status as raise_for_status
