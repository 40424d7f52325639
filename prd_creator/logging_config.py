"""Logging setup — console plus combined/error log files read back by get_logs."""

import logging

from prd_creator.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    settings.logs_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    combined = logging.FileHandler(settings.logs_dir / "combined.log", encoding="utf-8")
    combined.setFormatter(formatter)

    errors = logging.FileHandler(settings.logs_dir / "error.log", encoding="utf-8")
    errors.setLevel(logging.ERROR)
    errors.setFormatter(formatter)

    logging.basicConfig(
        level=settings.log_level.upper(),
        handlers=[console, combined, errors],
        force=True,
    )
    # SQL echo goes through its own logger; keep it out of the files unless asked
    if not settings.echo_sql:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
