import logging
import sys
from logging.handlers import RotatingFileHandler

from django.conf import settings

logger = logging.getLogger("chartdesk")

LOG_FORMAT = (
    "%(levelname)s - %(asctime)s - %(name)s - %(filename)s - %(caller_name)s - %(orgname)s: %(message)s"
)


class ContextDefaultsFilter(logging.Filter):
    """records from plain loggers lack the CustomLogger extras; fill them in"""

    def filter(self, record):
        if not hasattr(record, "caller_name"):
            record.caller_name = record.funcName
        if not hasattr(record, "orgname"):
            record.orgname = ""
        return True


def setup_logger():
    """setup the chartdesk logger"""
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    # log to stdout
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    handler.addFilter(ContextDefaultsFilter())
    logger.addHandler(handler)

    log_dir = settings.LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_dir / "chartdesk.log", maxBytes=1048576, backupCount=5)
    handler.setLevel(logging.INFO)
    handler.setFormatter(formatter)
    handler.addFilter(ContextDefaultsFilter())
    logger.addHandler(handler)

    return logger
