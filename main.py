# main.py

from uvicorn import run

from app.configs import settings


def main() -> None:
    """Serve the API with uvicorn using uvloop and httptools."""
    run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
        loop="uvloop",
        http="httptools",
    )


if __name__ == "__main__":
    main()
