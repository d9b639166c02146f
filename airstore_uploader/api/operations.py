"""
Storage API request functions.

One coroutine per remote operation. Each builds its URL and auth header from
an UploaderConfig, calls the transport and normalizes the response.

Only upload_files interprets application-level errors and notifies the alert
callback; every other function lets transport exceptions propagate unchanged
and reads missing response fields as None.
"""

import os
from typing import Any, Dict, Iterable, Mapping, Optional

import httpx

from airstore_uploader.config import env
from airstore_uploader.config.constants import (
  AUTOTAGGING_PATH,
  DEFAULT_LANGUAGE,
  DEFAULT_TAGGING_CONFIDENCE,
  DEFAULT_TAGGING_LIMIT,
  DEFAULT_TAGGING_PROVIDER,
  FILES_FIELD,
  GALLERY_IMAGES_LIMIT,
  JSON_DATA_TYPE,
)
from airstore_uploader.exceptions import UnexpectedResponseError, UploadRejectedError

from .alerts import AlertCallback, log_alert, notify_failure
from .config import UploaderConfig
from .models import (
  FileDescriptor,
  ListResult,
  LocalFile,
  SearchResult,
  TokenSettings,
  UploadResult,
)
from .responses import (
  UploadFailure,
  UploadSuccess,
  UploadSuccessSingle,
  as_mapping,
  decode_upload_response,
  to_upload_result,
)
from .transport import MultipartForm, send
from .urls import build_upload_url, get_base_url, get_secret_header_name


def _auth_headers(config: UploaderConfig) -> Dict[str, str]:
  return {get_secret_header_name(config.platform): config.upload_key}


def _append_file(form: MultipartForm, field_name: str, file: Any) -> None:
  if isinstance(file, LocalFile):
    form.append(field_name, file.content, file.filename, file.content_type)
  elif isinstance(file, str):
    form.append(field_name, file)
  else:
    name = getattr(file, "name", None)
    form.append(field_name, file, os.path.basename(name) if name else None)


async def upload_files(
  files: Optional[Iterable[FileDescriptor]],
  config: UploaderConfig,
  data_type: str = FILES_FIELD,
  directory: Optional[str] = None,
  show_alert: AlertCallback = log_alert,
  client: Optional[httpx.AsyncClient] = None,
) -> UploadResult:
  """
  Send files to storage.

  Two kinds of files can be sent:
    - local payloads (LocalFile, bytes or binary file objects)
    - URLs the storage service downloads itself

  Args:
      files: Files to upload
      config: Storage configuration (upload_path, upload_params, upload_key)
      data_type: "files[]", "files_url[]", a custom field name for a custom
        upload_path, or "application/json" to send URLs as a JSON body
      directory: Target directory, overrides upload_params["dir"]
      show_alert: Called as show_alert("", message, "error") on failure
      client: Shared AsyncClient

  Returns:
      UploadResult(files, is_duplicate, is_replacing_data)

  Raises:
      UploadRejectedError: The server answered {"status": "error"}
      UnexpectedResponseError: The response matched no known shape
      UploaderError: Transport failure, re-raised after the alert
  """
  files = list(files or [])
  url = build_upload_url(config.upload_path, config.upload_params, directory)
  headers = _auth_headers(config)

  data: Any
  if data_type == JSON_DATA_TYPE:
    data = {"files_urls": files}
    headers["Content-Type"] = JSON_DATA_TYPE
  else:
    # multipart Content-Type and boundary are set by httpx
    data = MultipartForm()
    for file in files:
      _append_file(data, data_type, file)

  try:
    response = await send(
      url,
      "POST",
      data,
      headers,
      "json",
      config.on_upload_progress,
      client=client,
      container=config.container,
    )

    decoded = decode_upload_response(response)
    if isinstance(decoded, UploadSuccessSingle):
      return to_upload_result([decoded.file], decoded.upload_state)
    if isinstance(decoded, UploadSuccess):
      return to_upload_result(decoded.files, decoded.upload_state)
    if isinstance(decoded, UploadFailure):
      raise UploadRejectedError(decoded.msg, decoded.hint, response_data=response)
    raise UnexpectedResponseError(decoded.raw)
  except Exception as e:
    notify_failure(e, show_alert)
    raise


async def get_list_files(
  config: UploaderConfig,
  directory: str = "",
  offset: int = 0,
  client: Optional[httpx.AsyncClient] = None,
) -> ListResult:
  """List one page of a directory: ListResult(files, directories, files_count)."""
  base_url = get_base_url(config.container, config.platform)
  directory_path = f"dir={directory}" if directory else ""
  url = "".join(
    [
      base_url,
      "list?",
      directory_path,
      f"&offset={offset}",
      f"&limit={GALLERY_IMAGES_LIMIT}",
    ]
  )

  response = as_mapping(
    await send(
      url,
      "GET",
      None,
      _auth_headers(config),
      client=client,
      container=config.container,
    )
  )
  current_directory = response.get("current_directory")

  return ListResult(
    files=response.get("files"),
    directories=response.get("directories"),
    files_count=current_directory.get("files_count")
    if isinstance(current_directory, Mapping)
    else None,
  )


async def search_files(
  config: UploaderConfig,
  query: str = "",
  offset: int = 0,
  client: Optional[httpx.AsyncClient] = None,
) -> SearchResult:
  """Full-text search over the container: SearchResult(files, total_files_count)."""
  base_url = get_base_url(config.container, config.platform)
  url = "".join([base_url, "search?", f"q={query}", f"&offset={offset}"])

  response = as_mapping(
    await send(
      url,
      "GET",
      None,
      _auth_headers(config),
      client=client,
      container=config.container,
    )
  )
  info = response.get("info")

  return SearchResult(
    files=response.get("files"),
    total_files_count=info.get("total_files_count")
    if isinstance(info, Mapping)
    else None,
  )


async def generate_tags(
  image_url: str,
  config: UploaderConfig,
  auto_tagging: Optional[Mapping[str, Any]] = None,
  language: str = DEFAULT_LANGUAGE,
  cloudimage_token: Optional[str] = None,
  client: Optional[httpx.AsyncClient] = None,
) -> Any:
  """
  Ask the tagging provider for tags describing an image.

  auto_tagging may carry key, provider, confidence and limit. The response is
  returned as received; its shape depends on the provider.
  """
  auto_tagging = auto_tagging or {}
  key = auto_tagging.get("key", "")
  provider = auto_tagging.get("provider", DEFAULT_TAGGING_PROVIDER)
  confidence = auto_tagging.get("confidence", DEFAULT_TAGGING_CONFIDENCE)
  limit = auto_tagging.get("limit", DEFAULT_TAGGING_LIMIT)
  if cloudimage_token is None:
    cloudimage_token = env.AIRSTORE_CLOUDIMAGE_TOKEN

  base = f"{get_base_url(config.container, config.platform)}{AUTOTAGGING_PATH}"
  query = "&".join(
    [
      f"key={key}",
      f"image_url={image_url}",
      f"provider={provider}",
      f"language={language}",
      f"confidence={confidence}",
      f"limit={limit}",
      f"ci={cloudimage_token}",
    ]
  )

  return await send(
    f"{base}?{query}",
    "GET",
    None,
    _auth_headers(config),
    client=client,
    container=config.container,
  )


async def save_meta_data(
  file_id: Any,
  properties: Mapping[str, Any],
  config: UploaderConfig,
  client: Optional[httpx.AsyncClient] = None,
) -> Any:
  """Replace a file's properties (title, description, tags, ...)."""
  base = f"{get_base_url(config.container, config.platform)}file/"

  return await send(
    f"{base}{file_id}/properties",
    "PUT",
    {"properties": properties},
    _auth_headers(config),
    client=client,
    container=config.container,
  )


async def update_product(
  file_id: Any,
  product: Mapping[str, Any],
  config: UploaderConfig,
  client: Optional[httpx.AsyncClient] = None,
) -> Any:
  """Attach product information to a file."""
  base = get_base_url(config.container, config.platform)

  return await send(
    f"{base}file/{file_id}/product",
    "PUT",
    {"product": product},
    _auth_headers(config),
    client=client,
    container=config.container,
  )


async def get_token_settings(
  config: UploaderConfig,
  client: Optional[httpx.AsyncClient] = None,
) -> TokenSettings:
  """Read token-level feature switches."""
  base_url = get_base_url(config.container, config.platform)

  response = as_mapping(
    await send(
      "".join([base_url, "settings"]),
      "GET",
      None,
      _auth_headers(config),
      client=client,
      container=config.container,
    )
  )
  settings = as_mapping(response.get("settings"))
  products_enabled = settings.get("_products_enabled")

  # strict: only the integer 1 enables products
  return TokenSettings(
    products_enabled=not isinstance(products_enabled, bool) and products_enabled == 1
  )
