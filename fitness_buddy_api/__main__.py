"""Serve the FitnessBuddy API with uvicorn.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``5000``).

Usage:
    python -m fitness_buddy_api
"""
import asyncio

from uvicorn import Config, Server

from fitness_buddy_api.app.core.config import settings
from fitness_buddy_api.app.main import app


async def serve() -> None:
    """Run the API server until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(serve())
    except (KeyboardInterrupt, SystemExit):
        pass
