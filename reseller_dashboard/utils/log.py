import logging
import sys

from reseller_dashboard.config import settings


def get_logger(name: str, prefix: str) -> logging.Logger:
    """
    Return a named logger writing "[PREFIX] message" lines to stdout.
    Handlers are attached once, so repeated imports don't duplicate output.
    """
    log = logging.getLogger(name)
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(f"[{prefix}] %(message)s"))
        log.addHandler(h)
    return log
