"""Run the development server: ``python -m postboard``."""

import uvicorn

from postboard.config import settings


def main() -> None:
    uvicorn.run(
        "postboard.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
