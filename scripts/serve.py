#!/usr/bin/env python3
"""Script to run the commit history web server."""

import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import uvicorn
from dotenv import load_dotenv

from giter.config import Settings
from giter.infrastructure.logging_config import setup_logging
from giter.interface.web import create_app

logger = logging.getLogger(__name__)


def main():
    """Start the web server."""
    load_dotenv()

    try:
        settings = Settings.from_env()
        log_path = setup_logging(settings.log_dir, settings.log_level)
    except (OSError, ValueError) as e:
        print(f"Failed to initialize: {e}", file=sys.stderr)
        return 1

    logger.info(f"Logging to {log_path}")

    try:
        app = create_app(settings)
        logger.info(f"Server starting on {settings.host}:{settings.port} for account {settings.account}")
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
        return 0

    except Exception as e:
        logger.error(f"Server failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
