"""
Synchronous wrapper for the storage API request functions.

This module provides blocking access to the async request functions for use
in CLI tools and other synchronous contexts.
"""

import asyncio
import concurrent.futures
from typing import Any, Iterable, Mapping, Optional

import httpx

from airstore_uploader.config.constants import DEFAULT_LANGUAGE, FILES_FIELD

from . import operations
from .alerts import AlertCallback, log_alert
from .config import UploaderConfig
from .models import (
  FileDescriptor,
  ListResult,
  SearchResult,
  TokenSettings,
  UploadResult,
)


class UploaderSyncClient:
  """
  Synchronous client bound to one UploaderConfig.

  Requests share one httpx.AsyncClient, driven by an event loop owned by this
  client. Call close() (or use it as a context manager) to release both.
  """

  def __init__(
    self,
    config: Optional[UploaderConfig] = None,
    show_alert: AlertCallback = log_alert,
    client: Optional[httpx.AsyncClient] = None,
    **kwargs,
  ):
    """
    Initialize the sync client.

    Args:
        config: Storage configuration, read from the environment when omitted
        show_alert: Alert callback for failed uploads
        client: AsyncClient to use instead of a new one; closed by close()
        **kwargs: Config overrides
    """
    config = config or UploaderConfig.from_env()
    if kwargs:
      config = config.with_overrides(**kwargs)
    self.config = config
    self.show_alert = show_alert
    self.http = (
      client
      if client is not None
      else httpx.AsyncClient(timeout=None, follow_redirects=True)
    )
    self._loop: Optional[asyncio.AbstractEventLoop] = None

  def __enter__(self):
    return self

  def __exit__(self, exc_type, exc_val, exc_tb):
    self.close()

  def close(self):
    """Close the HTTP client and the event loop driving it."""
    if not self.http.is_closed:
      self._run_async(self.http.aclose())
    if self._loop is not None and not self._loop.is_closed():
      self._loop.close()

  def _run_async(self, coro):
    """Run an async coroutine on this client's loop and return the result."""
    if self._loop is None or self._loop.is_closed():
      self._loop = asyncio.new_event_loop()

    try:
      asyncio.get_running_loop()
    except RuntimeError:
      # No running loop in this thread, drive ours directly
      return self._loop.run_until_complete(coro)

    # Already inside an event loop, drive ours from a worker thread
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
      future = executor.submit(self._loop.run_until_complete, coro)
      return future.result()

  def upload_files(
    self,
    files: Iterable[FileDescriptor],
    data_type: str = FILES_FIELD,
    directory: Optional[str] = None,
  ) -> UploadResult:
    """Upload files (see operations.upload_files)."""
    return self._run_async(
      operations.upload_files(
        files,
        self.config,
        data_type=data_type,
        directory=directory,
        show_alert=self.show_alert,
        client=self.http,
      )
    )

  def get_list_files(self, directory: str = "", offset: int = 0) -> ListResult:
    """List one page of a directory."""
    return self._run_async(
      operations.get_list_files(
        self.config, directory=directory, offset=offset, client=self.http
      )
    )

  def search_files(self, query: str = "", offset: int = 0) -> SearchResult:
    """Search the container."""
    return self._run_async(
      operations.search_files(
        self.config, query=query, offset=offset, client=self.http
      )
    )

  def generate_tags(
    self,
    image_url: str,
    auto_tagging: Optional[Mapping[str, Any]] = None,
    language: str = DEFAULT_LANGUAGE,
    cloudimage_token: Optional[str] = None,
  ) -> Any:
    """Generate tags for an image."""
    return self._run_async(
      operations.generate_tags(
        image_url,
        self.config,
        auto_tagging=auto_tagging,
        language=language,
        cloudimage_token=cloudimage_token,
        client=self.http,
      )
    )

  def save_meta_data(self, file_id: Any, properties: Mapping[str, Any]) -> Any:
    """Replace a file's properties."""
    return self._run_async(
      operations.save_meta_data(
        file_id, properties, self.config, client=self.http
      )
    )

  def update_product(self, file_id: Any, product: Mapping[str, Any]) -> Any:
    """Attach product information to a file."""
    return self._run_async(
      operations.update_product(file_id, product, self.config, client=self.http)
    )

  def get_token_settings(self) -> TokenSettings:
    """Read token-level feature switches."""
    return self._run_async(
      operations.get_token_settings(self.config, client=self.http)
    )
