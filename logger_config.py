import logging, os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "FLIGHT_PATHS"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def resolve_level(level: int | str) -> int:
    """Accept a level number (10, "10") or a level name ("debug")."""
    if isinstance(level, int):
        return level
    token = str(level).strip()
    if token.isdigit():
        return int(token)
    resolved = logging.getLevelName(token.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}.")
    return resolved


def get_logger(level: int | str = "WARNING", log_dir: str | None = None):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    if not logger.hasHandlers():
        formatter = logging.Formatter(LOG_FORMAT)

        # Console output goes to stderr so stdout only carries the report.
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, "flight_paths.log"),
                mode='a',
                maxBytes=5_000_000,
                backupCount=3,
                encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
