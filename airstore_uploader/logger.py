"""
Airstore Uploader logging entry point.

Exposes the package loggers:

- logger: general package logger
- api_logger: storage API requests and responses

Importing the package leaves logging configuration to the host application.
Entry points that own the process (the CLI) call setup_logging().
"""

from .config.logging import (
  get_logger,
  log_api_request,
  log_error,
  setup_logging,
)

logger = get_logger("airstore_uploader")
api_logger = get_logger("airstore_uploader.api")


__all__ = [
  "logger",
  "api_logger",
  "log_api_request",
  "log_error",
  "get_logger",
  "setup_logging",
]
