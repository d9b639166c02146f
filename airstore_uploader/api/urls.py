"""
URL and header construction for the storage API.

Everything here is pure string assembly. Query strings are joined as plain
key=value pairs without URL encoding, which is what the storage service
receives from the browser widget as well.
"""

import math
from typing import Mapping, Optional

from airstore_uploader.config.constants import (
  AIRSTORE_BASE_URL,
  AIRSTORE_SECRET_HEADER,
  CLOUDIMG_BASE_URL,
  DEFAULT_PREVIEW_HEIGHT,
  DEFAULT_PREVIEW_WIDTH,
  FILEROBOT_BASE_URL,
  FILEROBOT_SECRET_HEADER,
  PLATFORM_FILEROBOT,
)


def get_base_url(container: str, platform: str = PLATFORM_FILEROBOT) -> str:
  """Base API URL (with trailing slash) for a container on a platform."""
  if platform == PLATFORM_FILEROBOT:
    return FILEROBOT_BASE_URL.format(container=container)
  return AIRSTORE_BASE_URL.format(container=container)


def get_secret_header_name(platform: str = PLATFORM_FILEROBOT) -> str:
  """Header carrying the upload key for a platform."""
  if platform == PLATFORM_FILEROBOT:
    return FILEROBOT_SECRET_HEADER
  return AIRSTORE_SECRET_HEADER


def build_params_string(params: Mapping[str, Optional[object]]) -> str:
  """Join params as key=value pairs, skipping None values."""
  return "&".join(
    f"{name}={value}" for name, value in params.items() if value is not None
  )


def resolve_upload_path(upload_path: Optional[str]) -> str:
  """Protocol-relative upload paths ("//host/upload") are sent over https."""
  upload_path = upload_path or ""
  if upload_path.startswith("//"):
    return "https:" + upload_path
  return upload_path


def build_upload_url(
  upload_path: Optional[str],
  upload_params: Optional[Mapping[str, Optional[object]]] = None,
  directory: Optional[str] = None,
) -> str:
  """
  Upload endpoint with its query string.

  The target directory overrides upload_params["dir"] when given.
  """
  upload_params = upload_params or {}
  params = {**upload_params, "dir": directory or upload_params.get("dir")}

  url = resolve_upload_path(upload_path)
  params_str = build_params_string(params)
  if params_str:
    url += f"?{params_str}"
  return url


# Image previews served by cloudimg


def _round(value: float) -> int:
  # half-up, so 2.5 becomes 3
  return int(math.floor(value + 0.5))


def get_resize_image_url(url: str = "", width: float = DEFAULT_PREVIEW_WIDTH) -> str:
  return f"{CLOUDIMG_BASE_URL}/width/{_round(width)}/s/{url}"


def get_fit_resize_image_url(
  url: str = "",
  width: float = DEFAULT_PREVIEW_WIDTH,
  height: float = DEFAULT_PREVIEW_HEIGHT,
) -> str:
  return f"{CLOUDIMG_BASE_URL}/fit/{_round(width)}x{_round(height)}/ffffff/{url}"


def get_crop_image_url(
  url: str = "",
  width: float = DEFAULT_PREVIEW_WIDTH,
  height: float = DEFAULT_PREVIEW_HEIGHT,
) -> str:
  return f"{CLOUDIMG_BASE_URL}/crop/{_round(width)}x{_round(height)}/s/{url}"
