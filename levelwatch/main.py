"""Entry point — starts the levelwatch service."""

import sys

import uvicorn
from loguru import logger

from levelwatch.config import settings


def main():
    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=settings.log_level,
    )
    logger.add(
        settings.log_path,
        rotation="10 MB",
        retention="7 days",
        level="DEBUG",
    )

    logger.info("=" * 60)
    logger.info("  levelwatch — indicator snapshot merge & levels service")
    logger.info("=" * 60)
    logger.info(f"API: {settings.api_base}")
    logger.info(f"Symbol list: {settings.symbols_url or '(not configured)'}")

    from levelwatch.api.main import create_app

    app = create_app()
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
