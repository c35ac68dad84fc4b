"""Run the API with uvicorn: ``python -m atype`` (PORT, HOST from the environment)."""

import uvicorn

from atype.app import create_app
from atype.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
