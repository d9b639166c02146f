"""
HTTP transport for the storage API.

One generic request function. It returns the parsed response body only and
raises on network failures and non-2xx statuses; interpreting the body is left
to the request functions. There is no retry and no timeout.
"""

import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from airstore_uploader.config import env
from airstore_uploader.exceptions import UploaderHTTPError, UploaderTransportError
from airstore_uploader.logger import api_logger, log_api_request

from .models import UploadProgress

ProgressCallback = Callable[[UploadProgress], None]

SECRET_HEADERS = ("x-filerobot-key", "x-airstore-secret-key")


class MultipartForm:
  """Ordered multipart body, filled the way a browser FormData is."""

  def __init__(self) -> None:
    self.parts: List[Tuple[str, Tuple[Any, ...]]] = []

  def append(
    self,
    name: str,
    value: Any,
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
  ) -> None:
    """
    Add a part. Parts without a filename are sent as plain form fields.

    Args:
        name: Form field name (repeated names are allowed)
        value: bytes, a binary file object, or a str
        filename: Filename for file parts
        content_type: Explicit part content type
    """
    if content_type:
      self.parts.append((name, (filename, value, content_type)))
    else:
      self.parts.append((name, (filename, value)))

  def __len__(self) -> int:
    return len(self.parts)


def _mask_headers(headers: httpx.Headers) -> Dict[str, str]:
  masked = dict(headers)
  for name in list(masked):
    if name.lower() in SECRET_HEADERS:
      masked[name] = masked[name][:4] + "..."
  return masked


def _parse_body(response: httpx.Response, response_type: str) -> Any:
  if response_type == "bytes":
    return response.content
  if response_type == "text":
    return response.text

  if not response.content:
    return {}
  try:
    return response.json()
  except ValueError:
    return response.text


def _error_payload(response: httpx.Response) -> Any:
  try:
    return response.json()
  except ValueError:
    return response.text


def _track_upload_progress(
  http: httpx.AsyncClient,
  request: httpx.Request,
  on_upload_progress: ProgressCallback,
) -> httpx.Request:
  """Rebuild a request so its body streams in chunks, reporting progress."""
  body = request.read()
  total = len(body)
  if not total:
    return request

  chunk_size = max(env.AIRSTORE_PROGRESS_CHUNK_SIZE, 1)

  async def stream():
    loaded = 0
    for offset in range(0, total, chunk_size):
      chunk = body[offset : offset + chunk_size]
      yield chunk
      loaded += len(chunk)
      on_upload_progress(UploadProgress(loaded=loaded, total=total))

  # The request's Content-Length is kept, so the body is not sent chunked
  return http.build_request(
    request.method, request.url, headers=request.headers, content=stream()
  )


async def _send_with(
  http: httpx.AsyncClient,
  request_kwargs: Dict[str, Any],
  response_type: str,
  on_upload_progress: Optional[ProgressCallback],
  container: Optional[str] = None,
) -> Any:
  try:
    request = http.build_request(**request_kwargs)
  except httpx.InvalidURL as e:
    raise UploaderTransportError(f"Invalid URL: {e}") from e
  if on_upload_progress is not None:
    request = _track_upload_progress(http, request, on_upload_progress)

  api_logger.debug(f"Making request: {request.method} {request.url}")
  api_logger.debug(f"Request headers: {_mask_headers(request.headers)}")

  start_time = time.time()
  try:
    response = await http.send(request)
  except httpx.RequestError as e:
    raise UploaderTransportError(f"Request error: {e}") from e
  duration_ms = (time.time() - start_time) * 1000

  log_api_request(
    api_logger,
    request.method,
    str(request.url).split("?", 1)[0],
    response.status_code,
    duration_ms,
    container=container,
  )

  if not response.is_success:
    raise UploaderHTTPError(
      f"{request.method} request failed with status {response.status_code}",
      status_code=response.status_code,
      response_data=_error_payload(response),
    )

  return _parse_body(response, response_type)


async def send(
  url: str,
  method: str = "GET",
  data: Any = None,
  headers: Optional[Dict[str, str]] = None,
  response_type: str = "json",
  on_upload_progress: Optional[ProgressCallback] = None,
  client: Optional[httpx.AsyncClient] = None,
  container: Optional[str] = None,
) -> Any:
  """
  Issue one HTTP request and return the parsed response body.

  Args:
      url: Absolute request URL
      method: HTTP method
      data: None, a JSON-serializable value, or a MultipartForm
      headers: Request headers
      response_type: "json", "text" or "bytes"
      on_upload_progress: Called with UploadProgress while the body is sent
      client: Shared AsyncClient; a one-shot client is used when omitted
      container: Container name recorded in the request log

  Returns:
      Parsed body. For "json", an empty body is {} and a body that isn't
      JSON is returned as text.

  Raises:
      UploaderTransportError: No response was received
      UploaderHTTPError: The response status was not 2xx
  """
  request_kwargs: Dict[str, Any] = {
    "method": method,
    "url": url,
    "headers": dict(headers or {}),
  }

  if isinstance(data, MultipartForm):
    request_kwargs["files"] = data.parts
  elif data is not None:
    request_kwargs["json"] = data

  if client is not None:
    return await _send_with(
      client, request_kwargs, response_type, on_upload_progress, container
    )

  async with httpx.AsyncClient(timeout=None, follow_redirects=True) as http:
    return await _send_with(
      http, request_kwargs, response_type, on_upload_progress, container
    )
