import uvicorn

from vibepay.core.config import settings


def run() -> None:
    """Console entry point: serve the relay on HOST:PORT."""
    uvicorn.run(
        "vibepay.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=(settings.LOG_LEVEL or "INFO").lower(),
    )


if __name__ == "__main__":
    run()
