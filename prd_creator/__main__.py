"""Run the server: ``python -m prd_creator``."""

import uvicorn

from prd_creator.config import settings


def main() -> None:
    uvicorn.run("prd_creator.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
