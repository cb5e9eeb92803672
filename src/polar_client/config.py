"""
Client configuration.

Options can be passed directly or read from POLAR_* environment variables:

    options = PolarClientOptions.from_env()
    client = PolarClient(options=options)
"""

import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import __version__

PRODUCTION_BASE_URL = "https://api.polar.sh"
SANDBOX_BASE_URL = "https://sandbox-api.polar.sh"
DEFAULT_USER_AGENT = f"polar-client-python/{__version__}"


class PolarEnvironment(str, Enum):
    """Target Polar deployment."""
    PRODUCTION = "production"
    SANDBOX = "sandbox"

    @property
    def base_url(self) -> str:
        if self is PolarEnvironment.SANDBOX:
            return SANDBOX_BASE_URL
        return PRODUCTION_BASE_URL


class PolarClientOptions(BaseModel):
    """
    Validated configuration for PolarClient.

    Durations are in seconds. Out-of-range values raise a pydantic
    ValidationError (a ValueError subclass) at construction.
    """

    model_config = ConfigDict(validate_assignment=True, frozen=False)

    access_token: str = Field(min_length=1, repr=False)
    environment: PolarEnvironment = PolarEnvironment.PRODUCTION
    base_url: str | None = None
    timeout: float = Field(default=30.0, ge=1, le=300)
    max_retries: int = Field(default=3, ge=0, le=10)
    initial_retry_delay: float = Field(default=1.0, ge=0.1, le=60)
    max_retry_delay: float = Field(default=30.0, ge=0.1, le=300)
    jitter_factor: float = Field(default=0.1, ge=0, le=1)
    respect_retry_after: bool = True
    requests_per_minute: int = Field(default=300, ge=1, le=10000)
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("access_token")
    @classmethod
    def strip_token(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("access_token must not be blank")
        return v

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def resolved_base_url(self) -> str:
        """Explicit base_url wins over the environment's default."""
        return self.base_url or self.environment.base_url

    @property
    def api_url(self) -> str:
        return f"{self.resolved_base_url}/v1/"

    @classmethod
    def from_env(cls, **overrides: Any) -> "PolarClientOptions":
        """
        Build options from POLAR_* environment variables.

        Keyword overrides take precedence over the environment.
        """
        env_mappings = {
            "access_token": "POLAR_ACCESS_TOKEN",
            "environment": "POLAR_ENVIRONMENT",
            "base_url": "POLAR_BASE_URL",
            "timeout": "POLAR_TIMEOUT",
            "max_retries": "POLAR_MAX_RETRIES",
            "initial_retry_delay": "POLAR_INITIAL_RETRY_DELAY",
            "max_retry_delay": "POLAR_MAX_RETRY_DELAY",
            "requests_per_minute": "POLAR_REQUESTS_PER_MINUTE",
            "user_agent": "POLAR_USER_AGENT",
        }

        values: dict[str, Any] = {}
        for option, env_var in env_mappings.items():
            env_value = os.environ.get(env_var)
            if env_value is not None and env_value.strip():
                values[option] = env_value.strip()

        values.update({k: v for k, v in overrides.items() if v is not None})
        if "access_token" not in values:
            raise ValueError("POLAR_ACCESS_TOKEN is not set")

        return cls(**values)
