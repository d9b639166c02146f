"""Tests for UploaderConfig."""

import dataclasses

import pytest

from airstore_uploader.api.config import UploaderConfig
from airstore_uploader.api.models import Platform


class TestUploaderConfig:
  def test_defaults(self):
    config = UploaderConfig()

    assert config.platform == "filerobot"
    assert config.container == ""
    assert config.upload_key == ""
    assert config.upload_path == ""
    assert config.upload_params == {}
    assert config.on_upload_progress is None

  def test_from_env(self, monkeypatch):
    monkeypatch.setenv("AIRSTORE_PLATFORM", "airstore")
    monkeypatch.setenv("AIRSTORE_CONTAINER", "shop")
    monkeypatch.setenv("AIRSTORE_UPLOAD_KEY", "key-1")
    monkeypatch.setenv("AIRSTORE_UPLOAD_PATH", "https://shop.api.airstore.io/v1/upload")

    config = UploaderConfig.from_env()

    assert config.platform == "airstore"
    assert config.container == "shop"
    assert config.upload_key == "key-1"
    assert config.upload_path == "https://shop.api.airstore.io/v1/upload"

  def test_from_env_missing_values_keep_defaults(self, monkeypatch):
    for suffix in ("PLATFORM", "CONTAINER", "UPLOAD_KEY", "UPLOAD_PATH"):
      monkeypatch.delenv(f"AIRSTORE_{suffix}", raising=False)

    assert UploaderConfig.from_env() == UploaderConfig()

  def test_from_env_custom_prefix(self, monkeypatch):
    monkeypatch.setenv("CDN_CONTAINER", "media")

    assert UploaderConfig.from_env(prefix="CDN_").container == "media"

  def test_with_overrides_returns_new_instance(self, filerobot_config):
    updated = filerobot_config.with_overrides(container="other")

    assert updated is not filerobot_config
    assert updated.container == "other"
    assert filerobot_config.container == "demo"
    assert updated.upload_key == filerobot_config.upload_key

  def test_with_overrides_copies_upload_params(self, filerobot_config):
    updated = filerobot_config.with_overrides()

    assert updated.upload_params == {"dir": "/default"}
    assert updated.upload_params is not filerobot_config.upload_params

  def test_frozen(self, filerobot_config):
    with pytest.raises(dataclasses.FrozenInstanceError):
      filerobot_config.container = "changed"

  def test_platform_string_coerced_to_enum(self):
    config = UploaderConfig(platform="airstore")

    assert config.platform is Platform.AIRSTORE
    assert config.with_overrides().platform is Platform.AIRSTORE

  def test_from_env_platform_is_enum(self, monkeypatch):
    monkeypatch.setenv("AIRSTORE_PLATFORM", "filerobot")

    assert UploaderConfig.from_env().platform is Platform.FILEROBOT

  def test_unknown_platform_rejected(self):
    with pytest.raises(ValueError):
      UploaderConfig(platform="dropbox")
