"""Object-store configuration model for savepoint lookup.

This module owns all environment variable parsing and validation.
Backends consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    ACCESS_KEY_ID_ENV_VAR,
    ENDPOINT_URL_ENV_VAR,
    FALSE_VALUES,
    FORCE_PATH_STYLE_ENV_VAR,
    REGION_ENV_VAR,
    SECRET_ACCESS_KEY_ENV_VAR,
    SESSION_TOKEN_ENV_VAR,
    TRUE_VALUES,
    USE_SSL_ENV_VAR,
)
from core.errors import SavepointConfigError


@dataclass(frozen=True)
class ObjectStoreConfig:
    """Validated object-store configuration.

    Attributes:
        region: AWS region used for the S3 client.
        endpoint_url: Optional endpoint override for S3-compatible stores.
        use_ssl: Whether the client talks TLS to the endpoint.
        force_path_style: Whether bucket names go in the path, not the host.
        access_key_id: Optional static access key id.
        secret_access_key: Optional static secret key.
        session_token: Optional session token for temporary credentials.
    """

    region: str
    endpoint_url: str | None = None
    use_ssl: bool = True
    force_path_style: bool = False
    access_key_id: str | None = None
    secret_access_key: str | None = None
    session_token: str | None = None

    def __post_init__(self) -> None:
        if not self.region.strip():
            raise SavepointConfigError(
                f"{REGION_ENV_VAR} env var must be specified for S3 savepoint directories. "
                f"Set {REGION_ENV_VAR} to the bucket region and retry."
            )
        if self.access_key_id and not self.secret_access_key:
            raise SavepointConfigError(
                f"{ACCESS_KEY_ID_ENV_VAR} is set but {SECRET_ACCESS_KEY_ENV_VAR} is missing. "
                "Provide both static credentials or neither."
            )

    @classmethod
    def from_env(cls) -> "ObjectStoreConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SavepointConfigError: If a required value is absent or invalid.
        """
        return cls(
            region=os.getenv(REGION_ENV_VAR, ""),
            endpoint_url=os.getenv(ENDPOINT_URL_ENV_VAR) or None,
            use_ssl=_parse_bool(USE_SSL_ENV_VAR, default=True),
            force_path_style=_parse_bool(FORCE_PATH_STYLE_ENV_VAR, default=False),
            access_key_id=os.getenv(ACCESS_KEY_ID_ENV_VAR) or None,
            secret_access_key=os.getenv(SECRET_ACCESS_KEY_ENV_VAR) or None,
            session_token=os.getenv(SESSION_TOKEN_ENV_VAR) or None,
        )


def _parse_bool(env_var: str, default: bool) -> bool:
    """Parse a boolean environment value.

    Args:
        env_var: Environment variable name.
        default: Value used when the variable is unset or blank.

    Returns:
        Parsed boolean.

    Raises:
        SavepointConfigError: If the value is not a recognized boolean.
    """
    raw_value = os.getenv(env_var, "").strip().lower()
    if not raw_value:
        return default
    if raw_value in TRUE_VALUES:
        return True
    if raw_value in FALSE_VALUES:
        return False
    raise SavepointConfigError(
        f"Invalid {env_var} value: expected one of "
        f"{TRUE_VALUES + FALSE_VALUES}, got '{raw_value}'. "
        f"Set {env_var} to a boolean value."
    )
