"""MyShop entrypoint.

Run with:
  python -m myshop
"""

import uvicorn

from myshop.config import Settings


def main() -> None:
    settings = Settings()
    uvicorn.run(
        "myshop.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
