#!/usr/bin/env python3
"""Start the comments API, logging startup failures to Logfire."""

import sys

import logfire
import uvicorn

from comments.config import Settings
from comments.util.observability import configure_logfire


def main() -> int:
    """Configure observability, then serve the app factory with uvicorn."""
    settings = Settings()

    # Configured before the app is built so startup errors are captured
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting comments API", host=settings.host, port=settings.port
        )
        uvicorn.run(
            "comments.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
