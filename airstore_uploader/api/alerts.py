"""
User-facing alerts for failed uploads.

Classification and message formatting are pure (see
airstore_uploader.exceptions); this module only delivers the result.
"""

import logging
from typing import Callable

from airstore_uploader.exceptions import classify_error, format_alert_message
from airstore_uploader.logger import logger

# show_alert(title, message, level)
AlertCallback = Callable[[str, str, str], None]

ALERT_LEVELS = {
  "error": logging.ERROR,
  "warning": logging.WARNING,
  "info": logging.INFO,
  "success": logging.INFO,
}


def log_alert(title: str, message: str, level: str = "error") -> None:
  """Default notifier: writes the alert to the package logger."""
  logger.log(
    ALERT_LEVELS.get(level, logging.INFO),
    f"{title}: {message}" if title else message,
    extra={"component": "alerts", "action": level},
  )


def notify_failure(error: BaseException, show_alert: AlertCallback) -> str:
  """Send the alert for a failed request and return the message shown."""
  message = format_alert_message(error)
  logger.debug(f"Alerting {classify_error(error).value} failure: {message}")
  show_alert("", message, "error")
  return message
