"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

from clearhouse.core.config import AppSettings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(settings: AppSettings | None = None) -> None:
    """Configure console logging for the clearhouse package.

    Account numbers and decrypted file content are never passed to loggers;
    modules log filenames, counts, dates and totals only.
    """
    if settings is None:
        settings = AppSettings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger("clearhouse").setLevel(log_level)

    for noisy in ("boto3", "botocore", "urllib3", "s3transfer"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
