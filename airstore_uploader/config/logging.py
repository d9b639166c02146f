"""
Structured Logging Configuration for the Airstore Uploader

Plain console logs during development, JSON lines everywhere else so that a
host application can ship them to its log pipeline unchanged.

Key Features:
- Tiered logging (Critical/Operational/Debug) split across stderr/stdout
- Structured JSON output with consistent field names
- Automatic log level management by environment
- Request timing and error categorization helpers
"""

import json
import logging
import logging.config
import traceback
from datetime import datetime, timezone
from typing import Any

from airstore_uploader.config.env import EnvConfig

APP_LOGGERS = ["airstore_uploader", "airstore_uploader.api"]


class StructuredFormatter(logging.Formatter):
  """
  JSON formatter producing one searchable object per record.

  - Timestamp in ISO format
  - Consistent field names for filtering
  - Hierarchical component/action structure
  - Metadata preserved as searchable fields
  """

  def format(self, record: logging.LogRecord) -> str:
    log_entry = {
      "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
      .isoformat()
      .replace("+00:00", "Z"),
      "level": record.levelname,
      "component": getattr(record, "component", record.name),
      "message": record.getMessage(),
    }

    if hasattr(record, "action"):
      log_entry["action"] = record.action

    # Request context
    if hasattr(record, "method"):
      log_entry["method"] = record.method
    if hasattr(record, "url"):
      log_entry["url"] = record.url
    if hasattr(record, "container"):
      log_entry["container"] = record.container

    if hasattr(record, "duration_ms"):
      log_entry["duration_ms"] = record.duration_ms
    if hasattr(record, "status_code"):
      log_entry["status_code"] = record.status_code

    if record.levelno >= logging.ERROR:
      if record.exc_info:
        log_entry["error"] = {
          "type": record.exc_info[0].__name__ if record.exc_info[0] else "Unknown",
          "message": str(record.exc_info[1]) if record.exc_info[1] else "",
          "traceback": traceback.format_exception(*record.exc_info),
        }

      if hasattr(record, "error_category"):
        log_entry["error_category"] = record.error_category

    if hasattr(record, "metadata"):
      log_entry["metadata"] = record.metadata

    return json.dumps(log_entry, default=str, separators=(",", ":"))


class TieredLogFilter:
  """
  Filter logs by tier.

  Tier 1 (Critical): ERROR, CRITICAL
  Tier 2 (Operational): INFO, WARNING
  Tier 3 (Debug): DEBUG
  """

  def __init__(self, tier: str):
    self.tier = tier

  def filter(self, record: logging.LogRecord) -> bool:
    if self.tier == "critical":
      return record.levelno >= logging.ERROR
    elif self.tier == "operational":
      return logging.INFO <= record.levelno < logging.ERROR
    elif self.tier == "debug":
      return record.levelno == logging.DEBUG
    return True


def get_logging_config(environment: str | None = None) -> dict[str, Any]:
  """
  Generate logging configuration for the package loggers.

  Only the loggers in APP_LOGGERS are configured; the root logger and third
  party loggers belong to the host application.

  - prod: INFO level, structured output, no debug logs
  - staging: INFO level, with debug logs enabled
  - test: WARNING level, minimal output for clean test runs
  - dev: WARNING level unless LOG_LEVEL overrides, plain console output on stderr
  """
  env = EnvConfig.get_environment_key(environment)

  log_level_override = EnvConfig.LOG_LEVEL.upper() or None

  if env == "prod":
    default_level = "INFO"
    enable_debug = False
  elif env == "staging":
    default_level = "INFO"
    enable_debug = True
  elif env == "test":
    default_level = "WARNING"
    enable_debug = False
  else:  # dev
    default_level = log_level_override or "WARNING"
    # the console handler already carries DEBUG records
    enable_debug = False

  app_handlers = ["critical", "operational"] if env != "dev" else ["console"]

  config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
      "structured": {
        "()": StructuredFormatter,
      },
      "simple": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
    },
    "filters": {
      "critical_filter": {"()": TieredLogFilter, "tier": "critical"},
      "operational_filter": {"()": TieredLogFilter, "tier": "operational"},
      "debug_filter": {"()": TieredLogFilter, "tier": "debug"},
    },
    "handlers": {
      "critical": {
        "class": "logging.StreamHandler",
        "level": "ERROR",
        "formatter": "structured",
        "filters": ["critical_filter"],
        "stream": "ext://sys.stderr",
      },
      "operational": {
        "class": "logging.StreamHandler",
        "level": "INFO",
        "formatter": "structured",
        "filters": ["operational_filter"],
        "stream": "ext://sys.stdout",
      },
      # stdout is reserved for CLI output
      "console": {
        "class": "logging.StreamHandler",
        "level": default_level,
        "formatter": "simple" if env == "dev" else "structured",
        "stream": "ext://sys.stderr",
      },
    },
    "loggers": {
      name: {
        "level": default_level,
        "handlers": list(app_handlers),
        "propagate": False,
      }
      for name in APP_LOGGERS
    },
  }

  if enable_debug:
    config["handlers"]["debug"] = {
      "class": "logging.StreamHandler",
      "level": "DEBUG",
      "formatter": "structured",
      "filters": ["debug_filter"],
      "stream": "ext://sys.stdout",
    }

    for logger_name in APP_LOGGERS:
      config["loggers"][logger_name]["handlers"].append("debug")

  return config


def setup_logging(environment: str | None = None) -> None:
  """Initialize structured logging configuration."""
  config = get_logging_config(environment)
  logging.config.dictConfig(config)


def get_logger(name: str) -> logging.Logger:
  """Get a logger with structured logging capabilities."""
  return logging.getLogger(name)


def log_api_request(
  logger: logging.Logger,
  method: str,
  url: str,
  status_code: int,
  duration_ms: float,
  container: str | None = None,
) -> None:
  """Log a completed storage API request with structured data."""
  extra: dict[str, Any] = {
    "component": "api",
    "action": "request_completed",
    "method": method,
    "url": url,
    "status_code": status_code,
    "duration_ms": duration_ms,
  }
  if container:
    extra["container"] = container

  logger.info(f"{method} {url} - {status_code} ({duration_ms:.2f}ms)", extra=extra)


def log_error(
  logger: logging.Logger,
  error: Exception,
  component: str,
  action: str,
  error_category: str = "application",
  metadata: dict[str, Any] | None = None,
) -> None:
  """Log error with structured data for easy searching."""
  logger.error(
    f"Error in {component}.{action}: {error!s}",
    exc_info=error,
    extra={
      "component": component,
      "action": action,
      "error_category": error_category,
      "metadata": metadata or {},
    },
  )
