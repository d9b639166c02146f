"""
Storage API client - request layer for the uploader.

This package provides the async request functions for the Filerobot/Airstore
storage API, the transport they share and a synchronous wrapper.
"""

from .alerts import AlertCallback, log_alert, notify_failure
from .config import UploaderConfig
from .models import (
  FileDescriptor,
  ListResult,
  LocalFile,
  Platform,
  RemoteFile,
  SearchResult,
  TokenSettings,
  UploadProgress,
  UploadResult,
)
from .operations import (
  generate_tags,
  get_list_files,
  get_token_settings,
  save_meta_data,
  search_files,
  update_product,
  upload_files,
)
from .sync_client import UploaderSyncClient
from .transport import MultipartForm, send
from .urls import (
  build_params_string,
  build_upload_url,
  get_base_url,
  get_crop_image_url,
  get_fit_resize_image_url,
  get_resize_image_url,
  get_secret_header_name,
)

__all__ = [
  "AlertCallback",
  "FileDescriptor",
  "ListResult",
  "LocalFile",
  "MultipartForm",
  "Platform",
  "RemoteFile",
  "SearchResult",
  "TokenSettings",
  "UploadProgress",
  "UploadResult",
  "UploaderConfig",
  "UploaderSyncClient",
  "build_params_string",
  "build_upload_url",
  "generate_tags",
  "get_base_url",
  "get_crop_image_url",
  "get_fit_resize_image_url",
  "get_list_files",
  "get_resize_image_url",
  "get_secret_header_name",
  "get_token_settings",
  "log_alert",
  "notify_failure",
  "save_meta_data",
  "search_files",
  "send",
  "update_product",
  "upload_files",
]
