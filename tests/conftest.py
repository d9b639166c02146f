import os

# Entry points that call setup_logging() get the quiet test configuration
os.environ.setdefault("ENVIRONMENT", "test")

import httpx
import pytest

from airstore_uploader.api.config import UploaderConfig

TEST_CONTAINER = "demo"
TEST_UPLOAD_KEY = "secret-upload-key-123"


@pytest.fixture
def filerobot_config():
  """Filerobot config with an upload endpoint and default params."""
  return UploaderConfig(
    platform="filerobot",
    container=TEST_CONTAINER,
    upload_key=TEST_UPLOAD_KEY,
    upload_path="https://api.filerobot.com/demo/v3/upload",
    upload_params={"dir": "/default"},
  )


@pytest.fixture
def airstore_config():
  return UploaderConfig(
    platform="airstore",
    container=TEST_CONTAINER,
    upload_key=TEST_UPLOAD_KEY,
    upload_path="https://demo.api.airstore.io/v1/upload",
  )


@pytest.fixture
def recorded_requests():
  return []


@pytest.fixture
def mock_client_factory(recorded_requests):
  """
  Build an AsyncClient answering every request with the given response.

  Requests seen by the transport are appended to recorded_requests.
  """

  def factory(status_code=200, json=None, content=None, handler=None):
    def default_handler(request: httpx.Request) -> httpx.Response:
      recorded_requests.append(request)
      if content is not None:
        return httpx.Response(status_code, content=content)
      return httpx.Response(status_code, json=json if json is not None else {})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler or default_handler))

  return factory
