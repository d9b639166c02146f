"""
Airstore Uploader - upload files to Filerobot/Airstore storage and manage them.

Quick start:

    from airstore_uploader import init, LocalFile

    app = init({"settings": {"container": "demo", "upload_key": "...",
                             "upload_path": "https://api.filerobot.com/demo/v3/upload"}})
    result = await app.upload([LocalFile.from_path("cat.jpg")], directory="/pets")
"""

from .api import (
  ListResult,
  LocalFile,
  Platform,
  SearchResult,
  TokenSettings,
  UploaderConfig,
  UploaderSyncClient,
  UploadProgress,
  UploadResult,
  generate_tags,
  get_base_url,
  get_list_files,
  get_secret_header_name,
  get_token_settings,
  save_meta_data,
  search_files,
  update_product,
  upload_files,
)
from .app import AppState, MountTarget, UploaderApp, init
from .exceptions import (
  ErrorKind,
  UnexpectedResponseError,
  UploaderError,
  UploaderHTTPError,
  UploaderStateError,
  UploaderTransportError,
  UploadRejectedError,
  classify_error,
  format_alert_message,
)

__version__ = "1.0.0"

__all__ = [
  "AppState",
  "ErrorKind",
  "ListResult",
  "LocalFile",
  "MountTarget",
  "Platform",
  "SearchResult",
  "TokenSettings",
  "UnexpectedResponseError",
  "UploadProgress",
  "UploadRejectedError",
  "UploadResult",
  "UploaderApp",
  "UploaderConfig",
  "UploaderError",
  "UploaderHTTPError",
  "UploaderStateError",
  "UploaderSyncClient",
  "UploaderTransportError",
  "classify_error",
  "format_alert_message",
  "generate_tags",
  "get_base_url",
  "get_list_files",
  "get_secret_header_name",
  "get_token_settings",
  "init",
  "save_meta_data",
  "search_files",
  "update_product",
  "upload_files",
]
