"""
Uploader Client Configuration.

Per-request configuration for the storage API: which dialect to speak, which
container to address and how to authenticate.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .models import Platform, UploadProgress


@dataclass(frozen=True)
class UploaderConfig:
  """
  Configuration shared by every request function. Never mutated.

  platform accepts a Platform or its string value; anything else raises
  ValueError.
  """

  platform: Platform = Platform.FILEROBOT
  container: str = ""
  upload_key: str = ""
  upload_path: str = ""
  upload_params: Dict[str, Optional[str]] = field(default_factory=dict)
  on_upload_progress: Optional[Callable[[UploadProgress], None]] = None

  def __post_init__(self):
    object.__setattr__(self, "platform", Platform(self.platform))

  @classmethod
  def from_env(cls, prefix: str = "AIRSTORE_") -> "UploaderConfig":
    """
    Create configuration from environment variables.

    Args:
        prefix: Environment variable prefix

    Returns:
        UploaderConfig instance
    """
    env_mappings = {
      "platform": "PLATFORM",
      "container": "CONTAINER",
      "upload_key": "UPLOAD_KEY",
      "upload_path": "UPLOAD_PATH",
    }

    values: Dict[str, Any] = {}
    for attr, env_suffix in env_mappings.items():
      value = os.environ.get(prefix + env_suffix)
      if value is not None:
        values[attr] = value

    return cls(**values)

  def with_overrides(self, **kwargs: Any) -> "UploaderConfig":
    """
    Create a new config with overridden values.

    Args:
        **kwargs: Values to override

    Returns:
        New UploaderConfig instance
    """
    config_dict: Dict[str, Any] = {
      "platform": self.platform,
      "container": self.container,
      "upload_key": self.upload_key,
      "upload_path": self.upload_path,
      "upload_params": dict(self.upload_params),
      "on_upload_progress": self.on_upload_progress,
    }
    config_dict.update(kwargs)
    return UploaderConfig(**config_dict)
