"""FastAPI server entry point for SpamGuard Chat."""

import uvicorn

from .config import get_settings


def main():
    """Run the FastAPI server."""
    settings = get_settings()

    uvicorn.run(
        "spamguard.app:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=False,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
