"""
Explicit decoding of storage API responses.

Upload responses are decoded into one of four tagged variants instead of
being probed field by field at each call site.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union

from airstore_uploader.config.constants import DUPLICATE_CODE, REPLACING_DATA_CODE

from .models import RemoteFile, UploadResult


@dataclass(frozen=True)
class UploadSuccess:
  files: List[RemoteFile]
  upload_state: Optional[str] = None


@dataclass(frozen=True)
class UploadSuccessSingle:
  file: RemoteFile
  upload_state: Optional[str] = None


@dataclass(frozen=True)
class UploadFailure:
  msg: Any
  hint: Any


@dataclass(frozen=True)
class UploadUnknown:
  raw: Any


UploadResponse = Union[UploadSuccess, UploadSuccessSingle, UploadFailure, UploadUnknown]


def decode_upload_response(payload: Any) -> UploadResponse:
  """
  Decode an upload response body.

  A missing "status" counts as success. A singular "file" wins over "files",
  even when it is an empty object.
  """
  if not isinstance(payload, Mapping):
    return UploadUnknown(raw=payload)

  status = payload.get("status", "success")
  upload = payload.get("upload") or {}
  upload_state = upload.get("state") if isinstance(upload, Mapping) else None

  if status == "success":
    file = payload.get("file")
    if file is not None:
      return UploadSuccessSingle(file=file, upload_state=upload_state)

    files = payload.get("files", [])
    if files is not None:
      return UploadSuccess(files=list(files), upload_state=upload_state)
  elif status == "error":
    return UploadFailure(msg=payload.get("msg"), hint=payload.get("hint"))

  return UploadUnknown(raw=payload)


def to_upload_result(
  files: List[RemoteFile], upload_state: Optional[str]
) -> UploadResult:
  return UploadResult(
    files=files,
    is_duplicate=upload_state == DUPLICATE_CODE,
    is_replacing_data=upload_state == REPLACING_DATA_CODE,
  )


def as_mapping(payload: Any) -> Mapping[str, Any]:
  """Response bodies that aren't objects read as empty."""
  return payload if isinstance(payload, Mapping) else {}
