import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings) -> None:
    """Configure root logging from settings; optionally mirror to a file."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(settings.log_level.upper())
    # httpx logs full request URLs at INFO, including the weather API key
    logging.getLogger("httpx").setLevel(logging.WARNING)
