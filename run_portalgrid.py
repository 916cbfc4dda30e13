#!/usr/bin/env python3
"""Portal grid API launcher script."""

import sys
from pathlib import Path

import uvicorn
from loguru import logger

from portalgrid.core.config import get_server_settings


def configure_logging(level: str) -> None:
    logger.remove()  # Remove default handler
    logger.add(sys.stdout, level=level)  # Add stdout handler
    logger.add(
        Path.home() / ".portalgrid/portalgrid.log",
        rotation="10 MB",
        level="DEBUG",
    )  # Add file handler


def main():
    """Main entry point."""
    settings = get_server_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)

    logger.info("Starting portal grid server...")
    try:
        uvicorn.run(
            "portalgrid.main:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=settings.reload,
        )
    except Exception as e:
        logger.error(f"Error running portal grid server: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
