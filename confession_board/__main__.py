"""
Run the API with uvicorn on the configured host and port:

    DATABASE_URL=postgresql://... PORT=8080 python -m confession_board
"""

import uvicorn

from confession_board.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "confession_board.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
