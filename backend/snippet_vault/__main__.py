"""
Snippet Vault Backend - Console Entry Point
============================================

Usage:
    python -m snippet_vault
    snippet-vault            (installed console script)

Checks configuration before uvicorn starts, so a missing MONGO_URI exits
with status 1 and a readable message. A MongoDB connection failure during
startup is reported by uvicorn, which also exits non-zero.
"""

import logging
import sys

import uvicorn

from snippet_vault.config import settings
from snippet_vault.main import setup_logging

logger = logging.getLogger("snippet_vault")


def main() -> None:
    setup_logging(settings.log_level)
    try:
        settings.validate_required()
    except ValueError as e:
        logger.critical("%s", e)
        sys.exit(1)

    uvicorn.run(
        "snippet_vault.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
