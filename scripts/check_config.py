"""Check a broker ``.env`` file before deploying it.

Builds the broker settings from the entries in the file, with the process
environment filling only the variables the file leaves out. Then loads the
service account document those settings point to and scans both for
``PLACEHOLDER`` values left over from the example templates.

    python -m scripts.check_config --env-file /opt/broker/.env
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from fcm_broker.core.config import (
    ConfigurationInvalidError,
    load_service_account_info,
    settings_from_env_file,
)
from fcm_broker.core.logging import configure_logging
from fcm_broker.services.config_gate import find_placeholders

logger = logging.getLogger("fcm_broker.check_config")

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_PLACEHOLDER_ERROR = 4
EXIT_RUNTIME_ERROR = 5


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check a broker environment file.")
    parser.add_argument(
        "--env-file",
        default=Path(".env"),
        type=Path,
        help="Environment file to check (default: .env).",
    )
    return parser.parse_args(argv)


def check(env_file: Path) -> int:
    """Return the exit status describing the state of ``env_file``."""
    if not env_file.is_file():
        logger.error("Environment file %s does not exist.", env_file)
        return EXIT_RUNTIME_ERROR

    try:
        settings = settings_from_env_file(env_file)
    except ValidationError as exc:
        problems = ", ".join(
            ".".join(str(part) for part in error["loc"]) or error["type"]
            for error in exc.errors()
        )
        logger.error("Settings in %s are missing or invalid: %s", env_file, problems)
        return EXIT_VALIDATION_ERROR

    try:
        service_account = load_service_account_info(settings.fcm.service_account_file)
    except ConfigurationInvalidError as exc:
        logger.error("%s", exc)
        return EXIT_RUNTIME_ERROR

    placeholders = find_placeholders(settings, service_account)
    if placeholders:
        logger.error(
            "Replace the placeholder values before starting the broker: %s",
            ", ".join(placeholders),
        )
        return EXIT_PLACEHOLDER_ERROR

    logger.info("Configuration in %s is complete.", env_file)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging()
    return check(args.env_file)


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
