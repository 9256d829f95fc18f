import uvicorn

from .config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "recipe_server.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development" and settings.DEBUG,
        log_config=None,  # structlog handles application logs
    )


if __name__ == "__main__":
    main()
