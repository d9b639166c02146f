"""
Centralized configuration package for the Airstore Uploader.

This package provides a single source of truth for environment settings,
static constants and logging configuration.
"""

from .env import EnvConfig, env

__all__ = [
  "EnvConfig",
  "env",
]
