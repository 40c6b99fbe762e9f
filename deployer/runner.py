"""
Deployment Runner
Top-level entry: logging setup, single error handler, process exit code
"""

import asyncio
import sys
from loguru import logger

from .config import load_config
from .deployer import Deployer

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO", log_file: str = "data/logs/deploy.log"):
    """Console sink on stderr plus a rotating debug log file"""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )


async def main(config=None):
    """Load configuration and run one deployment"""
    config = config or load_config()
    deployer = Deployer(config)
    return await deployer.run()


def run(config=None) -> int:
    """
    Run a deployment

    Returns:
        0 on success, 1 on any error
    """
    try:
        asyncio.run(main(config))
    except Exception as e:
        logger.exception(f"Deployment failed: {e}")
        return 1

    return 0


def cli():
    setup_logging()
    sys.exit(run())


if __name__ == "__main__":
    cli()
