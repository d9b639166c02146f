"""
Request and result types for the storage API.

Remote files are server-defined dicts (id, public_link, properties, product)
and are passed through untouched; only "id" is used by later calls.
"""

import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, NamedTuple, Optional, Union

from airstore_uploader.config.constants import PLATFORM_AIRSTORE, PLATFORM_FILEROBOT

RemoteFile = Dict[str, Any]


class Platform(str, Enum):
  """API dialect spoken by the storage service."""

  FILEROBOT = PLATFORM_FILEROBOT
  AIRSTORE = PLATFORM_AIRSTORE


@dataclass(frozen=True)
class LocalFile:
  """A binary payload sent as one multipart file part."""

  content: Union[bytes, BinaryIO]
  filename: Optional[str] = None
  content_type: Optional[str] = None

  @classmethod
  def from_path(cls, path: Union[str, Path]) -> "LocalFile":
    path = Path(path)
    content_type, _ = mimetypes.guess_type(path.name)
    return cls(content=path.read_bytes(), filename=path.name, content_type=content_type)


# A file to upload: local payload or a URL the server fetches itself
FileDescriptor = Union[LocalFile, str]


class UploadProgress(NamedTuple):
  loaded: int
  total: int


class UploadResult(NamedTuple):
  files: List[RemoteFile]
  is_duplicate: bool
  is_replacing_data: bool


class ListResult(NamedTuple):
  files: Optional[List[RemoteFile]]
  directories: Optional[List[Any]]
  files_count: Optional[int]


class SearchResult(NamedTuple):
  files: Optional[List[RemoteFile]]
  total_files_count: Optional[int]


@dataclass(frozen=True)
class TokenSettings:
  products_enabled: bool
