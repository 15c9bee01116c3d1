"""
Runtime environment for token builds.

DTCG_CSS_ENV selects the environment:

    - development (default): verbose build logging
    - test: verbose build logging
    - production: default (non-verbose) build logging unless tokens.yaml
      sets a log level explicitly
"""

from __future__ import annotations

import logging
import os

from .ir.config import Environment, LogLevel

logger = logging.getLogger(__name__)

ENV_VAR = "DTCG_CSS_ENV"


def get_environment() -> Environment:
    """Get the current environment from DTCG_CSS_ENV.

    Returns:
        Environment: development, test, or production. Unknown values fall
        back to development with a warning.
    """
    env_value = os.environ.get(ENV_VAR, "").lower().strip()

    if env_value in ("production", "prod"):
        return Environment.PRODUCTION
    elif env_value in ("test", "testing"):
        return Environment.TEST
    elif env_value in ("development", "dev", ""):
        return Environment.DEVELOPMENT
    else:
        logger.warning(
            "Unknown %s value '%s'. "
            "Valid values: development, test, production. Defaulting to development.",
            ENV_VAR,
            env_value,
        )
        return Environment.DEVELOPMENT


def default_log_level(env: Environment) -> LogLevel:
    """Build log level used when the configuration does not set one."""
    if env == Environment.PRODUCTION:
        return LogLevel.DEFAULT
    return LogLevel.VERBOSE
