import logging
import sys

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'

# Client libraries whose INFO/DEBUG output drowns the request log
NOISY_LOGGERS = ("sqlalchemy.engine", "botocore", "boto3", "s3transfer", "urllib3")


def configure_logging(level="INFO", logger_name="link_registry"):
    """Send all records to stdout and return the application logger."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("uvicorn.error").propagate = True
    logging.getLogger("uvicorn.access").disabled = True

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger(logger_name)
