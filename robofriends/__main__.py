"""Run the Directory Service: python -m robofriends"""

import uvicorn

from robofriends.config import settings


def main() -> None:
    uvicorn.run(
        "robofriends.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
