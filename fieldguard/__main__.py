"""Run the demo application: ``python -m fieldguard``."""

import uvicorn

from fieldguard.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "fieldguard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL,
    )


if __name__ == "__main__":
    main()
