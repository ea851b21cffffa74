import logging, sys

from curiosity_service.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def setup_logging(level: str | None = None) -> logging.Logger:
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())
    # uvicorn reload and test imports can call this more than once
    if not any(getattr(h, "_curiosity", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._curiosity = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    # httpx logs full request URLs at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logging.getLogger("curiosity_service")
