"""Run the broker with uvicorn: ``python -m fcm_broker``."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from fcm_broker.core.config import ConfigurationInvalidError
from fcm_broker.core.logging import configure_logging

logger = logging.getLogger("fcm_broker")

EXIT_CONFIG_INVALID = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the FCM token broker.")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1).")
    parser.add_argument("--port", default=8080, type=int, help="Port to listen on (default: 8080).")
    return parser


def _exit_config_invalid(message: str, *args: object) -> int:
    # Settings may have failed before create_app configured logging.
    configure_logging()
    logger.error(message, *args)
    return EXIT_CONFIG_INVALID


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        from fcm_broker.main import create_app

        app = create_app()
    except ConfigurationInvalidError as exc:
        return _exit_config_invalid("Exiting: %s", exc)
    except ValidationError as exc:
        return _exit_config_invalid(
            "Exiting: settings validation failed. Missing or invalid values detected:\n%s",
            exc.json(indent=2),
        )

    import uvicorn

    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
