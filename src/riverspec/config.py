"""Provider configuration: endpoint and credentials for the management API."""

from __future__ import annotations

import logging
import os
from typing import Any

from pydantic import BaseModel

from .api import DEFAULT_ENDPOINT

logger = logging.getLogger(__name__)

API_ENDPOINT_ENV_VAR = "RIVERSPEC_API_ENDPOINT"
API_TOKEN_ENV_VAR = "RIVERSPEC_API_TOKEN"


class ProviderConfig(BaseModel):
    """Connection settings; explicit values win over the environment."""

    endpoint: str = DEFAULT_ENDPOINT
    token: str = ""
    timeout: float = 30.0

    @classmethod
    def resolve(cls, **overrides: Any) -> ProviderConfig:
        """Merge explicit settings over environment variables and defaults.

        Empty or None overrides are ignored so unset CLI options and blank
        HCL attributes fall through to the environment.
        """
        values: dict[str, Any] = {}
        if endpoint := os.environ.get(API_ENDPOINT_ENV_VAR):
            values["endpoint"] = endpoint
        if token := os.environ.get(API_TOKEN_ENV_VAR):
            values["token"] = token

        values.update({k: v for k, v in overrides.items() if v not in (None, "")})
        config = cls(**values)
        logger.debug("Using API endpoint %s", config.endpoint)
        return config
