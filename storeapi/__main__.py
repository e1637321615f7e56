"""`python -m storeapi` — run the API under uvicorn on HOST:PORT."""

import uvicorn

from storeapi.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "storeapi.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
