"""
Logging configuration for the task service.
"""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for the process.

    Uvicorn installs its own handlers for its loggers; we only attach a
    stream handler to the root logger so `app.*` loggers are visible.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_task_service", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._task_service = True
        root.addHandler(handler)

    # SQLAlchemy echoes every statement at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
