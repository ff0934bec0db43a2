"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn recipe_share.main:app --reload

    # Production
    uvicorn recipe_share.main:app --host 0.0.0.0 --workers 4
"""

from recipe_share.factory import create_app


app = create_app()


def run() -> None:
    """Console entry point: serve with the configured host and port."""
    import uvicorn

    from recipe_share.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "recipe_share.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
