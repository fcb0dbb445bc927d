"""Configuration module for the FaaS gateway client.

This module provides the GatewayConfig class describing how to reach a
gateway: its URL, the request timeout, TLS verification and credentials.

Example:
    Basic usage with defaults:

        >>> config = GatewayConfig()
        >>> config.gateway_url
        'http://127.0.0.1:8080'

    Custom configuration:

        >>> config = GatewayConfig(
        ...     gateway_url="https://gateway.example.com/",
        ...     timeout_seconds=10,
        ...     token="s3cr3t",
        ... )
        >>> config.gateway_url
        'https://gateway.example.com'

    Loading from environment:

        >>> import os
        >>> os.environ['FAAS_GATEWAY_GATEWAY_URL'] = 'http://gateway:8080'
        >>> os.environ['FAAS_GATEWAY_TIMEOUT_SECONDS'] = '5'
        >>> config = GatewayConfig.from_env()
"""

import os
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator, model_validator

from faas_gateway_client import __version__

DEFAULT_GATEWAY_URL = "http://127.0.0.1:8080"
DEFAULT_USER_AGENT = f"faas-gateway-client/{__version__}"


class GatewayConfig(BaseModel):
    """Connection settings for a FaaS gateway.

    Attributes:
        gateway_url: Base URL of the gateway, e.g. ``http://127.0.0.1:8080``.
            Must use the http or https scheme. A trailing slash is removed.
        timeout_seconds: Upper bound for a single request, in seconds.
            Must be greater than 0 and at most 3600. Default is 60.
        tls_insecure: Skip TLS certificate verification. Default is False.
        username: User name for HTTP basic authentication.
        password: Password for HTTP basic authentication.
        token: Bearer token. Cannot be combined with basic authentication.
        user_agent: Value of the User-Agent header sent with every request.

    Note:
        This class is immutable (frozen=True). Create a new instance if you
        need different settings.
    """

    gateway_url: str = Field(
        default=DEFAULT_GATEWAY_URL,
        description="Base URL of the gateway",
    )
    timeout_seconds: float = Field(
        default=60.0,
        description="Per-request timeout in seconds (0-3600, exclusive of 0)",
    )
    tls_insecure: bool = Field(
        default=False,
        description="Skip TLS certificate verification",
    )
    username: str | None = Field(
        default=None,
        description="User name for HTTP basic authentication",
    )
    password: str | None = Field(
        default=None,
        description="Password for HTTP basic authentication",
        repr=False,
    )
    token: str | None = Field(
        default=None,
        description="Bearer token for authentication",
        repr=False,
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header value",
        min_length=1,
    )

    model_config = {"frozen": True}

    @field_validator("gateway_url")
    @classmethod
    def validate_gateway_url(cls, v: str) -> str:
        """Validate the gateway URL and strip trailing slashes.

        Args:
            v: The configured gateway URL.

        Returns:
            The URL without trailing slashes.

        Raises:
            ValueError: If the URL has no host or a scheme other than http/https.

        Example:
            >>> GatewayConfig(gateway_url="http://gw:8080/").gateway_url
            'http://gw:8080'
        """
        v = v.strip()
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https"):
            raise ValueError(f"gateway_url must use http or https, got {v!r}")
        if not parts.netloc:
            raise ValueError(f"gateway_url must include a host, got {v!r}")
        return v.rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout_seconds(cls, v: float) -> float:
        """Validate the timeout is within the accepted range."""
        if not (0 < v <= 3600):
            raise ValueError(f"timeout_seconds must be > 0 and <= 3600, got {v}")
        return v

    @model_validator(mode="after")
    def validate_credentials(self) -> "GatewayConfig":
        """Validate the credential combination.

        Basic authentication needs both a user name and a password, and it
        cannot be combined with a bearer token.

        Returns:
            The validated config instance.

        Raises:
            ValueError: If the credentials are incomplete or conflicting.
        """
        if (self.username is None) != (self.password is None):
            raise ValueError("username and password must be set together")
        if self.token is not None and self.username is not None:
            raise ValueError("token cannot be combined with username/password")
        return self

    @property
    def has_credentials(self) -> bool:
        """Whether any authentication is configured."""
        return self.token is not None or self.username is not None

    @classmethod
    def from_env(cls, prefix: str = "FAAS_GATEWAY_") -> "GatewayConfig":
        """Create configuration from environment variables.

        Variable names are the uppercase field names with the prefix, for
        example ``FAAS_GATEWAY_GATEWAY_URL`` or ``FAAS_GATEWAY_TOKEN``.

        Args:
            prefix: Prefix for environment variable names.

        Returns:
            GatewayConfig instance populated from environment variables.

        Example:
            >>> import os
            >>> os.environ['FAAS_GATEWAY_TLS_INSECURE'] = 'true'
            >>> GatewayConfig.from_env().tls_insecure
            True

        Note:
            Missing variables fall back to the defaults defined on the model.
        """
        config_dict: dict[str, Any] = {}

        field_types = {
            "gateway_url": str,
            "timeout_seconds": float,
            "tls_insecure": bool,
            "username": str,
            "password": str,
            "token": str,
            "user_agent": str,
        }

        for field_name, field_type in field_types.items():
            env_var = f"{prefix}{field_name.upper()}"
            env_value = os.environ.get(env_var)

            if env_value is not None:
                if field_type is float:
                    config_dict[field_name] = float(env_value)
                elif field_type is bool:
                    config_dict[field_name] = env_value.strip().lower() in ("1", "true", "yes", "on")
                else:
                    config_dict[field_name] = env_value

        return cls(**config_dict)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "GatewayConfig":
        """Create configuration from a dictionary.

        Args:
            config_dict: Dictionary with configuration values.

        Returns:
            GatewayConfig instance populated from the dictionary.

        Raises:
            ValidationError: If the dictionary contains invalid values.
        """
        return cls(**config_dict)
