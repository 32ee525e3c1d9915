"""Run the service with uvicorn: ``python -m huds_backend``."""

import os

import uvicorn

from huds_backend.infrastructure.config import get_port


def main() -> None:
    uvicorn.run(
        "huds_backend.app:app",
        host="0.0.0.0",
        port=get_port(),
        reload=os.getenv("ENVIRONMENT") == "development",
    )


if __name__ == "__main__":
    main()
