"""
Logging setup shared by the Meteoride service and its scripts.

Usage
-----
In the server entrypoint:

    from utils.logging_utils import setup_logging

    setup_logging(level="INFO", job_name="meteoride-api")

In a module:

    from utils.logging_utils import get_tagged_logger

    logger = get_tagged_logger(__name__, tag="response_cache/redis")
    logger.info("Cache hit", extra={"key": key})

Every record carries `job_name` and `tag` so that API, cache and provider
logs can be told apart when they share one stream.
"""

from __future__ import annotations

import logging
import logging.config
import re
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse


# Records emitted before setup_logging() still get a timestamp and level.
BOOTSTRAP_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
BOOTSTRAP_DATEFMT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    level=logging.INFO,
    format=BOOTSTRAP_FORMAT,
    datefmt=BOOTSTRAP_DATEFMT,
)


DEFAULT_LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(job_name)s | %(tag)s | %(name)s | %(message)s"
)
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_SENSITIVE_QUERY_TOKENS = ("pass", "pwd", "secret", "token", "key")
# `key=abc` style pairs in free text, e.g. urllib3 "GET /v1/current.json?key=abc" lines.
_SECRET_PAIR_RE = re.compile(
    r"(?i)(\b[\w.-]*(?:" + "|".join(_SENSITIVE_QUERY_TOKENS) + r")[\w.-]*=)[^&\s'\"]+"
)

_CONFIGURED: bool = False


class MaxLevelFilter(logging.Filter):
    """Pass only records at or below `max_level` (keeps stdout free of warnings)."""

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        return record.levelno <= self.max_level


class EnsureTagFilter(logging.Filter):
    """
    Give every record a `tag`.

    Records coming through `get_tagged_logger` already have one; plain
    loggers (uvicorn, redis, urllib3) get the last segment of their name.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "tag"):
            logger_name = getattr(record, "name", "")
            record.tag = logger_name.split(".")[-1] if logger_name else "-"
        return True


class RedactSecretsFilter(logging.Filter):
    """
    Mask secret-looking `name=value` pairs in the rendered message.

    Provider clients never log their API key, but third-party loggers
    (urllib3 at DEBUG) print request lines with the full query string.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        message = record.getMessage()
        redacted = _SECRET_PAIR_RE.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class JobNameFilter(logging.Filter):
    """Stamp the process-wide `job_name` on records that lack one."""

    def __init__(self, job_name: Optional[str] = None) -> None:
        super().__init__()
        self._job_name = job_name or "-"

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "job_name"):
            record.job_name = self._job_name
        return True


def build_logging_config(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    job_name: Optional[str] = None,
) -> Mapping[str, Any]:
    """
    Build the dictConfig mapping used by `setup_logging`.

    DEBUG/INFO records go to stdout and WARNING+ to stderr, both through the
    same formatter. Both handlers redact secrets and stamp tag/job fields.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "ensure_tag": {"()": EnsureTagFilter},
            "redact_secrets": {"()": RedactSecretsFilter},
            "job_name": {"()": JobNameFilter, "job_name": job_name},
            "stdout_max_info": {
                "()": MaxLevelFilter,
                "max_level": logging.INFO,
            },
        },
        "formatters": {
            "standard": {
                "format": log_format,
                "datefmt": date_format,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["redact_secrets", "ensure_tag", "job_name", "stdout_max_info"],
                "level": "DEBUG",
                "stream": "ext://sys.stdout",
            },
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["redact_secrets", "ensure_tag", "job_name"],
                "level": "WARNING",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["stdout", "stderr"],
        },
    }


def setup_logging(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    job_name: Optional[str] = None,
    override_existing: bool = False,
) -> None:
    """
    Apply the logging configuration once per process.

    Later calls are no-ops unless `override_existing` is True, so both the
    FastAPI app module and `run_server.py` can call this safely.
    """
    global _CONFIGURED

    if _CONFIGURED and not override_existing:
        return

    config_dict = build_logging_config(
        level=level,
        log_format=log_format,
        date_format=date_format,
        job_name=job_name,
    )
    logging.config.dictConfig(config_dict)
    _CONFIGURED = True


def get_tagged_logger(
    name: str,
    *,
    tag: Optional[str] = None,
) -> logging.LoggerAdapter:
    """
    Return a LoggerAdapter whose records always carry `tag`.

    `tag` defaults to the last dotted segment of `name`.
    """
    base_logger = logging.getLogger(name)
    if tag is None:
        tag = name.split(".")[-1]
    return logging.LoggerAdapter(base_logger, {"tag": tag})


def mask_url(url: str) -> str:
    """Return `url` with credentials and secret-looking query values masked.

    Examples
    --------
    - redis://:hunter2@cache:6379/0 -> redis://:***@cache:6379/0
    - https://api.weatherapi.com/v1/current.json?key=abc&q=1,2
        -> https://api.weatherapi.com/v1/current.json?key=%2A%2A%2A&q=1%2C2
    """
    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError:
        return url

    masked_query_pairs = []
    for key, value in parse_qsl(parsed.query, keep_blank_values=True):
        if any(token in key.lower() for token in _SENSITIVE_QUERY_TOKENS):
            masked_query_pairs.append((key, "***"))
        else:
            masked_query_pairs.append((key, value))
    masked_query = urlencode(masked_query_pairs)

    netloc = ""
    if parsed.username or parsed.password is not None:
        # Redis URLs commonly carry a password with an empty username.
        netloc += "***" if parsed.username else ""
        if parsed.password is not None:
            netloc += ":***"
        netloc += "@"
    if parsed.hostname:
        netloc += parsed.hostname
    if port:
        netloc += f":{port}"

    return urlunparse(
        (parsed.scheme, netloc, parsed.path or "", parsed.params or "", masked_query, parsed.fragment or "")
    )
