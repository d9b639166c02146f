"""
Centralized environment variable configuration.

This module provides a single source of truth for the environment variables
read by the uploader, with type conversions and default values.

Organization:
- Helper functions for type-safe env var access
- Core application settings
- Storage service settings
"""

import os

from .constants import (
  DEFAULT_CLOUDIMAGE_TOKEN,
  UPLOAD_PROGRESS_CHUNK_SIZE,
)


# ==========================================================================
# HELPER FUNCTIONS FOR TYPE-SAFE ENVIRONMENT VARIABLE ACCESS
# ==========================================================================


def get_int_env(key: str, default: int) -> int:
  """
  Get an integer environment variable with safe type conversion.

  Args:
      key: Environment variable name
      default: Default value if not set or invalid

  Returns:
      Integer value from environment or default
  """
  try:
    return int(os.getenv(key, str(default)))
  except (ValueError, TypeError):
    # Use print instead of logger to avoid circular import
    print(f"Warning: Invalid {key} value, using default: {default}")
    return default


def get_str_env(key: str, default: str = "") -> str:
  """Get a string environment variable."""
  return os.getenv(key, default)


# ==========================================================================
# MAIN CONFIGURATION CLASS
# ==========================================================================


class EnvConfig:
  """
  Centralized environment variable configuration.

  Storage credentials are per-request and live on UploaderConfig; this
  class only carries process-wide settings.
  """

  # ==========================================================================
  # CORE APPLICATION SETTINGS
  # ==========================================================================

  ENVIRONMENT = get_str_env("ENVIRONMENT", "dev")
  LOG_LEVEL = get_str_env("LOG_LEVEL", "")

  # ==========================================================================
  # STORAGE SERVICE SETTINGS
  # ==========================================================================

  AIRSTORE_CLOUDIMAGE_TOKEN = get_str_env(
    "AIRSTORE_CLOUDIMAGE_TOKEN", DEFAULT_CLOUDIMAGE_TOKEN
  )
  AIRSTORE_PROGRESS_CHUNK_SIZE = get_int_env(
    "AIRSTORE_PROGRESS_CHUNK_SIZE", UPLOAD_PROGRESS_CHUNK_SIZE
  )

  # ==========================================================================
  # HELPER METHODS
  # ==========================================================================

  @classmethod
  def get_environment_key(cls, environment: str | None = None) -> str:
    """
    Get normalized environment key for logging configuration.

    Args:
        environment: Environment name, ENVIRONMENT when omitted

    Returns:
        Normalized environment name: 'prod', 'staging', 'test' or 'dev'
    """
    env_lower = (environment or cls.ENVIRONMENT).lower()
    if env_lower in ["prod", "production"]:
      return "prod"
    elif env_lower in ["staging", "stage"]:
      return "staging"
    elif env_lower in ["test", "testing"]:
      return "test"
    else:
      return "dev"



# ==========================================================================
# SINGLETON INSTANCE
# ==========================================================================

env = EnvConfig()
