"""
Airstore Uploader Exceptions.

Defines the exception hierarchy for storage API operations, plus pure helpers
that classify a failure and turn it into a user-facing alert message.
"""

from enum import Enum
from typing import Any, Optional


class UploaderError(Exception):
  """Base exception for all uploader errors."""

  def __init__(
    self,
    message: str,
    status_code: Optional[int] = None,
    response_data: Any = None,
  ):
    super().__init__(message)
    self.message = message
    self.status_code = status_code
    self.response_data = response_data


class UploaderTransportError(UploaderError):
  """
  The request never produced an HTTP response.

  Examples: DNS failure, connection refused, unsupported URL scheme
  """

  pass


class UploaderHTTPError(UploaderError):
  """
  The server answered with a non-2xx status.

  response_data holds the decoded error body ({"code": ..., "msg": ...} for
  the storage API) or the raw text when it isn't JSON.
  """

  pass


class UploadRejectedError(UploaderError):
  """Upload answered 200 with {"status": "error", "msg": ..., "hint": ...}."""

  def __init__(self, msg: Any, hint: Any, response_data: Any = None):
    super().__init__(f"{msg} {hint}", response_data=response_data)
    self.server_msg = msg
    self.hint = hint


class UnexpectedResponseError(UploaderError):
  """Upload response matched none of the known shapes."""

  def __init__(self, response_data: Any):
    super().__init__("Unexpected upload response", response_data=response_data)
    self.msg = (
      response_data.get("msg") if isinstance(response_data, dict) else None
    )


class UploaderStateError(UploaderError):
  """An application lifecycle transition was requested out of order."""

  pass


class ErrorKind(str, Enum):
  TRANSPORT = "transport"
  HTTP_STATUS = "http_status"
  APPLICATION = "application"
  UNEXPECTED_RESPONSE = "unexpected_response"
  UNKNOWN = "unknown"


def classify_error(error: BaseException) -> ErrorKind:
  """Map an exception raised by a request function to its ErrorKind."""
  if isinstance(error, UploaderTransportError):
    return ErrorKind.TRANSPORT
  if isinstance(error, UploaderHTTPError):
    return ErrorKind.HTTP_STATUS
  if isinstance(error, UploadRejectedError):
    return ErrorKind.APPLICATION
  if isinstance(error, UnexpectedResponseError):
    return ErrorKind.UNEXPECTED_RESPONSE
  return ErrorKind.UNKNOWN


def format_alert_message(error: BaseException) -> str:
  """
  Build the alert text for a failed upload.

  Uses "{code}: {msg}" from an HTTP error payload when either is present
  (a list of messages is joined with ", "), then the error's own msg, then
  its message.
  """
  payload: Any = {}
  if classify_error(error) is ErrorKind.HTTP_STATUS:
    payload = getattr(error, "response_data", None) or {}
  if not isinstance(payload, dict):
    payload = {}

  code = payload.get("code") or ""
  msg = payload.get("msg")
  if isinstance(msg, (list, tuple)):
    msg = ", ".join(str(item) for item in msg)

  if code or msg:
    return f"{code}: {msg or ''}"

  return getattr(error, "msg", None) or str(error)
