"""Local daemon serving vault requests to UI clients."""

import asyncio
import signal
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime, timezone
import psutil
from aiohttp import web
from loguru import logger

from svgvault import __version__
from .api import create_api_app
from .config import Config, LoggingConfig
from .service import VaultService


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(settings: Optional[LoggingConfig] = None, level: Optional[str] = None) -> None:
    """Replace loguru's default sink with the svgvault sinks."""
    settings = settings or LoggingConfig()
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level or settings.level)

    if settings.file:
        log_file = Path(settings.file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation=settings.rotation,
            retention=settings.retention,
            level="DEBUG"
        )


class VaultDaemon:
    """Hosts the vault service behind the HTTP API."""

    def __init__(self, config: Config):
        self.config = config
        self.start_time = datetime.now(timezone.utc)
        self.service = VaultService(config)

        self.api_app = None
        self.api_runner = None
        self.api_site = None

    async def start(self) -> None:
        logger.info("Starting svgvault daemon...")

        self.api_app = create_api_app(self)
        self.api_runner = web.AppRunner(self.api_app)
        await self.api_runner.setup()

        self.api_site = web.TCPSite(
            self.api_runner,
            self.config.api.host,
            self.config.api.port
        )
        await self.api_site.start()

        logger.info(f"API server started on http://{self.config.api.host}:{self.config.api.port}")

    async def stop(self) -> None:
        logger.info("Stopping svgvault daemon...")

        if self.api_site:
            await self.api_site.stop()
            self.api_site = None
        if self.api_runner:
            await self.api_runner.cleanup()
            self.api_runner = None

        logger.info("svgvault daemon stopped")

    def get_status(self) -> dict:
        """Daemon status and statistics."""
        process = psutil.Process()
        uptime = (datetime.now(timezone.utc) - self.start_time).total_seconds()

        return {
            "status": "running",
            "version": __version__,
            "uptime": f"{uptime:.0f}s",
            "stats": {
                **self.service.stats,
                "memory_mb": process.memory_info().rss / 1024 / 1024,
            },
            "config": {
                "sidecar_name": self.config.indexer.sidecar_name,
                "extensions": self.config.indexer.extensions,
                "structured_parser": self.config.indexer.structured_parser,
            }
        }


async def main(config_path: Optional[str] = None):
    """Main entry point for the daemon."""
    try:
        config = Config.load(Path(config_path) if config_path else None)
    except FileNotFoundError as e:
        configure_logging()
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    configure_logging(config.logging)

    daemon = VaultDaemon(config)
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers
            pass

    try:
        await daemon.start()
        await stop_event.wait()
        logger.info("Shutdown signal received")
    finally:
        await daemon.stop()


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
