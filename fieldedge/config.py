# =============================================================================
# fieldedge/config.py  —  Client configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns environment variables into one frozen ClientConfig.  It is read
#   once at startup (main.py) and handed to FieldEdgeClient; nothing else
#   in the process reads the environment.
#
# ENVIRONMENT VARIABLES:
#   FIELDEDGE_API_KEY           required, bearer token
#   FIELDEDGE_ENVIRONMENT       "production" (default) or "sandbox"
#   FIELDEDGE_API_URL           explicit base URL; wins over the environment
#   FIELDEDGE_COMPANY_ID        optional tenant id, sent as X-Company-Id
#   FIELDEDGE_SUBSCRIPTION_KEY  optional, sent as Ocp-Apim-Subscription-Key
#   FIELDEDGE_TIMEOUT           per-request timeout in seconds (default 30)
#
# main.py calls load_dotenv() first, so a local .env file works too.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

PRODUCTION_BASE_URL = "https://api.fieldedge.com/v1"
SANDBOX_BASE_URL = "https://sandbox-api.fieldedge.com/v1"

ENVIRONMENTS = {
    "production": PRODUCTION_BASE_URL,
    "sandbox": SANDBOX_BASE_URL,
}

DEFAULT_TIMEOUT = 30.0


class ConfigurationError(Exception):
    """Raised when the environment cannot produce a usable ClientConfig."""


@dataclass(frozen=True)
class ClientConfig:
    api_key: str                              # Bearer credential
    base_url: str = PRODUCTION_BASE_URL       # No trailing slash
    company_id: Optional[str] = None          # Tenant header, when set
    subscription_key: Optional[str] = None    # APIM subscription header, when set
    timeout: float = DEFAULT_TIMEOUT          # Seconds per outbound call

    def __repr__(self) -> str:
        # Credentials never appear in the repr.
        return (
            f"ClientConfig(base_url={self.base_url!r}, "
            f"company_id={self.company_id!r}, timeout={self.timeout!r})"
        )


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_config(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Build a ClientConfig from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to ``os.environ``.

    Returns:
        The frozen ClientConfig.

    Raises:
        ConfigurationError: the API key is missing, the environment name is
            unknown, or the timeout is not a positive number.
    """
    env = os.environ if environ is None else environ

    api_key = _clean(env.get("FIELDEDGE_API_KEY"))
    if api_key is None:
        raise ConfigurationError("FIELDEDGE_API_KEY environment variable is required")

    environment = (_clean(env.get("FIELDEDGE_ENVIRONMENT")) or "production").lower()
    if environment not in ENVIRONMENTS:
        raise ConfigurationError(
            f"FIELDEDGE_ENVIRONMENT must be one of {sorted(ENVIRONMENTS)}, got {environment!r}"
        )

    base_url = _clean(env.get("FIELDEDGE_API_URL")) or ENVIRONMENTS[environment]

    timeout = DEFAULT_TIMEOUT
    raw_timeout = _clean(env.get("FIELDEDGE_TIMEOUT"))
    if raw_timeout is not None:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"FIELDEDGE_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None
        if timeout <= 0:
            raise ConfigurationError("FIELDEDGE_TIMEOUT must be greater than zero")

    return ClientConfig(
        api_key=api_key,
        base_url=base_url.rstrip("/"),
        company_id=_clean(env.get("FIELDEDGE_COMPANY_ID")),
        subscription_key=_clean(env.get("FIELDEDGE_SUBSCRIPTION_KEY")),
        timeout=timeout,
    )
