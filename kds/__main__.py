"""
Run the service with uvicorn: ``python -m kds``
"""
import uvicorn

from kds.config import settings


def main() -> None:
    uvicorn.run("kds.main:app", host="0.0.0.0", port=settings.SERVICE_PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
