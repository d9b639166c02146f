"""
Application context for an embedded uploader.

init() returns an explicit UploaderApp instead of registering anything
globally. Lifecycle: create -> configure -> mount -> unmount. Rendering is
delegated to a MountTarget supplied by the host.
"""

import copy
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

import httpx

from airstore_uploader.api import operations
from airstore_uploader.api.alerts import AlertCallback, log_alert
from airstore_uploader.api.config import UploaderConfig
from airstore_uploader.api.models import (
  FileDescriptor,
  ListResult,
  SearchResult,
  TokenSettings,
  UploadResult,
)
from airstore_uploader.config.constants import (
  DEFAULT_LANGUAGE,
  FILES_FIELD,
  PLATFORM_FILEROBOT,
)
from airstore_uploader.exceptions import UploaderStateError
from airstore_uploader.logger import logger


def _noop(*args, **kwargs) -> None:
  pass


DEFAULT_OPTIONS: Dict[str, Any] = {
  "modules": [],
  "settings": {
    "platform": PLATFORM_FILEROBOT,
    "container": "",
    "upload_key": "",
    "upload_path": None,
    "upload_params": {},
    "on_upload_progress": None,
  },
  "on_upload": _noop,
  "show_alert": log_alert,
}


class AppState(str, Enum):
  CREATED = "created"
  CONFIGURED = "configured"
  MOUNTED = "mounted"
  UNMOUNTED = "unmounted"


class MountTarget(ABC):
  """Host-side renderer the app is mounted into."""

  @abstractmethod
  def render(self, app: "UploaderApp", opened: bool) -> None:
    pass

  @abstractmethod
  def unmount(self) -> None:
    pass


def merge_options(options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
  """
  Merge caller options over DEFAULT_OPTIONS.

  Top-level keys are replaced, "settings" is merged key by key, and
  upload_params always carries opt_auth_upload_key (None unless given).
  Falsy values fall back to the defaults.
  """
  options = dict(options or {})
  merged = copy.deepcopy({k: v for k, v in DEFAULT_OPTIONS.items() if k != "settings"})
  merged.update({k: v for k, v in options.items() if k != "settings"})

  settings = dict(DEFAULT_OPTIONS["settings"])
  settings.update(options.get("settings") or {})
  settings["upload_path"] = settings.get("upload_path") or None
  upload_params = dict(settings.get("upload_params") or {})
  upload_params["opt_auth_upload_key"] = upload_params.get("opt_auth_upload_key") or None
  settings["upload_params"] = upload_params
  merged["settings"] = settings

  merged["modules"] = merged.get("modules") or []
  merged["on_upload"] = merged.get("on_upload") or _noop
  merged["show_alert"] = merged.get("show_alert") or log_alert
  return merged


class UploaderApp:
  """One uploader instance, its configuration and mount state."""

  def __init__(self, client: Optional[httpx.AsyncClient] = None):
    self.state = AppState.CREATED
    self.options: Dict[str, Any] = {}
    self.config: Optional[UploaderConfig] = None
    self.opened = False
    self.client = client
    self._target: Optional[MountTarget] = None

  # Lifecycle

  def configure(self, options: Optional[Mapping[str, Any]] = None) -> "UploaderApp":
    if self.state is AppState.MOUNTED:
      raise UploaderStateError("Cannot reconfigure a mounted uploader; unmount first")

    self.options = merge_options(options)
    settings = self.options["settings"]
    self.config = UploaderConfig(
      platform=settings["platform"] or PLATFORM_FILEROBOT,
      container=settings["container"] or "",
      upload_key=settings["upload_key"] or "",
      upload_path=settings["upload_path"] or "",
      upload_params=settings["upload_params"],
      on_upload_progress=settings["on_upload_progress"],
    )
    self.state = AppState.CONFIGURED
    logger.debug(
      f"Uploader configured for container '{self.config.container}' "
      f"on {self.config.platform.value}"
    )
    return self

  def mount(self, target: MountTarget, opened: bool = False) -> "UploaderApp":
    if self.state not in (AppState.CONFIGURED, AppState.UNMOUNTED):
      raise UploaderStateError(f"Cannot mount an uploader in state '{self.state.value}'")

    target.render(self, opened)
    self._target = target
    self.opened = opened
    self.state = AppState.MOUNTED
    return self

  def unmount(self) -> None:
    if self.state is not AppState.MOUNTED or self._target is None:
      raise UploaderStateError(f"Cannot unmount an uploader in state '{self.state.value}'")

    self._target.unmount()
    self._target = None
    self.opened = False
    self.state = AppState.UNMOUNTED

  def _require_config(self) -> UploaderConfig:
    if self.config is None:
      raise UploaderStateError("Uploader is not configured")
    return self.config

  @property
  def show_alert(self) -> AlertCallback:
    return self.options.get("show_alert") or log_alert

  @property
  def on_upload(self) -> Callable[[UploadResult], Any]:
    return self.options.get("on_upload") or _noop

  # Storage operations bound to this app's config

  async def upload(
    self,
    files: Iterable[FileDescriptor],
    data_type: str = FILES_FIELD,
    directory: Optional[str] = None,
  ) -> UploadResult:
    result = await operations.upload_files(
      files,
      self._require_config(),
      data_type=data_type,
      directory=directory,
      show_alert=self.show_alert,
      client=self.client,
    )
    self.on_upload(result)
    return result

  async def list_files(self, directory: str = "", offset: int = 0) -> ListResult:
    return await operations.get_list_files(
      self._require_config(), directory=directory, offset=offset, client=self.client
    )

  async def search(self, query: str = "", offset: int = 0) -> SearchResult:
    return await operations.search_files(
      self._require_config(), query=query, offset=offset, client=self.client
    )

  async def generate_tags(
    self,
    image_url: str,
    auto_tagging: Optional[Mapping[str, Any]] = None,
    language: str = DEFAULT_LANGUAGE,
  ) -> Any:
    return await operations.generate_tags(
      image_url,
      self._require_config(),
      auto_tagging=auto_tagging,
      language=language,
      client=self.client,
    )

  async def save_meta_data(self, file_id: Any, properties: Mapping[str, Any]) -> Any:
    return await operations.save_meta_data(
      file_id, properties, self._require_config(), client=self.client
    )

  async def update_product(self, file_id: Any, product: Mapping[str, Any]) -> Any:
    return await operations.update_product(
      file_id, product, self._require_config(), client=self.client
    )

  async def get_token_settings(self) -> TokenSettings:
    return await operations.get_token_settings(
      self._require_config(), client=self.client
    )


def init(
  options: Optional[Mapping[str, Any]] = None,
  is_opened: bool = False,
  target: Optional[MountTarget] = None,
  client: Optional[httpx.AsyncClient] = None,
) -> UploaderApp:
  """
  Create and configure an uploader, mounting it when a target is given.

  Args:
      options: Caller options merged over DEFAULT_OPTIONS
      is_opened: Whether the widget renders opened
      target: Host renderer to mount into
      client: Shared AsyncClient for all requests of this app

  Returns:
      The UploaderApp context
  """
  app = UploaderApp(client=client).configure(options)
  if target is not None:
    app.mount(target, opened=is_opened)
  return app
