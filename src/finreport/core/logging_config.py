import logging
import sys
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class NamespaceFilter(logging.Filter):
    """Only lets through records whose logger name starts with an allowed namespace."""

    def __init__(self, allowed_namespaces: Optional[Iterable[str]] = None):
        super().__init__()
        self.allowed_namespaces = list(allowed_namespaces) if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True  # No namespaces configured, allow everything
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def configure_logging(
    level: str = "INFO", allowed_namespaces: Optional[Iterable[str]] = None
) -> logging.Logger:
    """Attach a stdout handler to the ``finreport`` logger.

    Modules log through ``logging.getLogger(__name__)`` and so inherit this
    configuration (e.g. ``finreport.features.reports.service``). Calling it
    again replaces the handler instead of stacking a second one.
    """
    app_logger = logging.getLogger("finreport")
    app_logger.setLevel(level)

    for handler in list(app_logger.handlers):
        if getattr(handler, "_finreport_console", False):
            app_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler._finreport_console = True
    if allowed_namespaces:
        console_handler.addFilter(NamespaceFilter(allowed_namespaces))
    app_logger.addHandler(console_handler)

    # Report generation and scheduling are the parts worth tracing in detail.
    # logging.getLogger("finreport.features.reports").setLevel(logging.DEBUG)

    # To print the SQL Tortoise sends:
    # logging.getLogger("tortoise.db_client").setLevel(logging.DEBUG)
    return app_logger
