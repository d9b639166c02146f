from unittest.mock import patch

import pytest
from click.testing import CliRunner

from airstore_uploader.api.models import (
  ListResult,
  LocalFile,
  SearchResult,
  TokenSettings,
  UploadResult,
)
from airstore_uploader.api.sync_client import UploaderSyncClient
from airstore_uploader.cli import cli
from airstore_uploader.exceptions import UploaderHTTPError

BASE_ARGS = [
  "--container",
  "demo",
  "--upload-key",
  "secret-upload-key-123",
  "--upload-path",
  "https://api.filerobot.com/demo/v3/upload",
]


@pytest.fixture
def runner():
  return CliRunner()


@pytest.fixture(autouse=True)
def mock_setup_logging():
  with patch("airstore_uploader.cli.setup_logging") as mock:
    yield mock


def test_cli_configures_logging(runner, mock_setup_logging):
  with patch.object(
    UploaderSyncClient, "get_token_settings", return_value=TokenSettings(False)
  ):
    result = runner.invoke(cli, [*BASE_ARGS, "settings"])

  assert result.exit_code == 0, result.output
  mock_setup_logging.assert_called_once_with()


def test_cli_closes_client_on_exit(runner):
  with patch.object(
    UploaderSyncClient, "get_token_settings", return_value=TokenSettings(False)
  ), patch.object(UploaderSyncClient, "close") as mock_close:
    result = runner.invoke(cli, [*BASE_ARGS, "settings"])

  assert result.exit_code == 0, result.output
  mock_close.assert_called_once_with()


def test_upload_local_files(runner, tmp_path):
  path = tmp_path / "cat.jpg"
  path.write_bytes(b"jpeg")
  result_value = UploadResult([{"id": "f1", "name": "cat.jpg"}], True, False)

  with patch.object(
    UploaderSyncClient, "upload_files", return_value=result_value
  ) as mock_upload:
    result = runner.invoke(cli, [*BASE_ARGS, "upload", str(path), "--dir", "/pets"])

  assert result.exit_code == 0, result.output
  files = mock_upload.call_args.args[0]
  assert files == [LocalFile(b"jpeg", "cat.jpg", "image/jpeg")]
  assert mock_upload.call_args.kwargs == {"data_type": "files[]", "directory": "/pets"}
  assert "f1" in result.output
  assert "Duplicate" in result.output


def test_upload_urls_as_json(runner):
  with patch.object(
    UploaderSyncClient, "upload_files", return_value=UploadResult([], False, False)
  ) as mock_upload:
    result = runner.invoke(
      cli, [*BASE_ARGS, "upload", "--url", "--json", "https://example.com/a.jpg"]
    )

  assert result.exit_code == 0, result.output
  assert mock_upload.call_args.args[0] == ["https://example.com/a.jpg"]
  assert mock_upload.call_args.kwargs["data_type"] == "application/json"


def test_upload_json_requires_url(runner):
  with patch.object(UploaderSyncClient, "upload_files") as mock_upload:
    result = runner.invoke(cli, [*BASE_ARGS, "upload", "--json", "a.jpg"])

  assert result.exit_code == 2
  assert "--json only applies to URL uploads" in result.output
  mock_upload.assert_not_called()


def test_upload_missing_file(runner, tmp_path):
  result = runner.invoke(cli, [*BASE_ARGS, "upload", str(tmp_path / "missing.jpg")])

  assert result.exit_code == 1
  assert "Cannot read file" in result.output


def test_upload_error_becomes_click_error(runner):
  error = UploaderHTTPError("POST request failed with status 403", status_code=403)

  with patch.object(UploaderSyncClient, "upload_files", side_effect=error):
    result = runner.invoke(cli, [*BASE_ARGS, "upload", "--url", "https://x/a.jpg"])

  assert result.exit_code == 1
  assert "POST request failed with status 403" in result.output


def test_list(runner):
  with patch.object(
    UploaderSyncClient,
    "get_list_files",
    return_value=ListResult([{"id": "f1"}], [{"name": "cats"}], 1),
  ) as mock_list:
    result = runner.invoke(cli, [*BASE_ARGS, "list", "--dir", "pets", "--offset", "250"])

  assert result.exit_code == 0, result.output
  mock_list.assert_called_once_with(directory="pets", offset=250)
  assert "cats" in result.output
  assert "Total:" in result.output


def test_search(runner):
  with patch.object(
    UploaderSyncClient, "search_files", return_value=SearchResult([], 0)
  ) as mock_search:
    result = runner.invoke(cli, [*BASE_ARGS, "search", "red"])

  assert result.exit_code == 0, result.output
  mock_search.assert_called_once_with(query="red", offset=0)


def test_tags(runner):
  with patch.object(
    UploaderSyncClient, "generate_tags", return_value={"tags": ["cat"]}
  ) as mock_tags:
    result = runner.invoke(
      cli, [*BASE_ARGS, "tags", "https://example.com/cat.jpg", "--limit", "3"]
    )

  assert result.exit_code == 0, result.output
  assert mock_tags.call_args.kwargs["auto_tagging"] == {
    "key": "",
    "provider": "google",
    "confidence": 60,
    "limit": 3,
  }
  assert "cat" in result.output


def test_settings(runner):
  with patch.object(
    UploaderSyncClient, "get_token_settings", return_value=TokenSettings(True)
  ):
    result = runner.invoke(cli, [*BASE_ARGS, "settings"])

  assert result.exit_code == 0, result.output
  assert "enabled" in result.output


def test_set_meta(runner):
  with patch.object(
    UploaderSyncClient, "save_meta_data", return_value={"status": "success"}
  ) as mock_save:
    result = runner.invoke(cli, [*BASE_ARGS, "set-meta", "f1", "title=Cat", "alt=A cat"])

  assert result.exit_code == 0, result.output
  mock_save.assert_called_once_with("f1", {"title": "Cat", "alt": "A cat"})


def test_set_meta_rejects_bad_pair(runner):
  result = runner.invoke(cli, [*BASE_ARGS, "set-meta", "f1", "title"])

  assert result.exit_code == 2
  assert "Expected KEY=VALUE" in result.output


def test_set_product_rejects_bad_json(runner):
  result = runner.invoke(cli, [*BASE_ARGS, "set-product", "f1", "{not json"])

  assert result.exit_code == 2
  assert "Invalid JSON" in result.output


def test_set_product(runner):
  with patch.object(
    UploaderSyncClient, "update_product", return_value={"status": "success"}
  ) as mock_update:
    result = runner.invoke(cli, [*BASE_ARGS, "set-product", "f1", '{"ref": "SKU-1"}'])

  assert result.exit_code == 0, result.output
  mock_update.assert_called_once_with("f1", {"ref": "SKU-1"})
