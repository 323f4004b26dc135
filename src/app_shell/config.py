import logging
import os
import sys

from src.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_ops_rules(rules: Rules) -> None:
    """
    Validate operational requirements before startup.

    Exits the process when a required environment variable is missing.
    """
    missing = [env_var for env_var in rules.ops.required_env if env_var not in os.environ]

    if missing:
        logger.critical("Missing required environment variables: %s", ", ".join(missing))
        sys.exit(1)

    logger.info("Configuration validated (rules version %s)", rules.project.rules_version)
