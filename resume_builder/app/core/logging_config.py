import logging

from resume_builder.app.core.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure root logging from the LOG_LEVEL setting.

    Args:
        settings (Settings): The application settings.

    Notes:
        1. Unknown level names fall back to INFO.
        2. Existing handlers are replaced so repeated calls stay idempotent.

    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
