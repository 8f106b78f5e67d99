"""Local development server."""

import uvicorn

from feastfit.config import Settings


def main() -> None:
    """Serve the FeastFit API with uvicorn."""
    settings = Settings()
    uvicorn.run(
        "feastfit.api.asgi:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
