"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from nutri_tracker.api.app import create_app
from nutri_tracker.app_logging import configure_logging, install_crash_handlers
from nutri_tracker.config import Settings
from nutri_tracker.containers import build_container


def main() -> None:
    """Load settings, install crash handlers and run the server."""
    configure_logging()
    settings = Settings()
    install_crash_handlers(settings.crash_flush_delay_seconds)
    app = create_app(build_container(settings))
    uvicorn.run(app, host="0.0.0.0", port=settings.port)  # noqa: S104


if __name__ == "__main__":
    main()
