"""Core constants used across savepoint locator modules.

This module centralizes scheme aliases, marker names, and env var names.
Keeping values here avoids magic literals in resolution logic.
"""

from __future__ import annotations

OBJECT_STORE_SCHEMES = frozenset({"s3", "s3a", "s3p"})
SAVEPOINT_METADATA_SUFFIX = "_metadata"
PATH_SEPARATOR = "/"
LIST_OBJECTS_OPERATION = "list_objects_v2"
S3_SERVICE_NAME = "s3"

REGION_ENV_VAR = "AWS_REGION"
ACCESS_KEY_ID_ENV_VAR = "AWS_ACCESS_KEY_ID"
SECRET_ACCESS_KEY_ENV_VAR = "AWS_SECRET_ACCESS_KEY"
SESSION_TOKEN_ENV_VAR = "AWS_SESSION_TOKEN"
ENDPOINT_URL_ENV_VAR = "SAVEPOINT_S3_ENDPOINT_URL"
USE_SSL_ENV_VAR = "SAVEPOINT_S3_USE_SSL"
FORCE_PATH_STYLE_ENV_VAR = "SAVEPOINT_S3_FORCE_PATH_STYLE"

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")
