"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn recipe_manager.main:app --reload

    # Or via the installed script
    recipe-manager
"""

from recipe_manager.core.config import get_settings
from recipe_manager.factory import create_app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "recipe_manager.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
