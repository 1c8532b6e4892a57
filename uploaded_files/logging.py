import logging
import sys

from uploaded_files.settings import settings

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"

PACKAGE_LOGGER = "uploaded_files"

# Chatty per-request loggers pulled in by the S3 backend.
NOISY_LOGGERS = ("botocore", "boto3", "s3transfer", "urllib3")


def _level(name: str, default: int) -> int:
    if not name:
        return default
    level = getattr(logging, name.upper(), None)
    return level if isinstance(level, int) else default


def configure_logging() -> None:
    """Configure the root logger based on settings.

    Call once at startup. ``package_log_level`` tunes the ``uploaded_files``
    loggers independently of the root level, e.g. DEBUG to trace key and URL
    translation while the rest of the process stays at INFO.
    """
    level = _level(settings.log_level, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)

    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(
            JsonFormatter(
                fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
                rename_fields={"asctime": "timestamp", "levelname": "level"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger(PACKAGE_LOGGER).setLevel(_level(settings.package_log_level, logging.NOTSET))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    # Suppress uvicorn access logs; routes log what they do.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
