"""Shared helpers used across Sumway packages."""

from .paths import get_app_data_dir, APP_NAME

__all__ = ["get_app_data_dir", "APP_NAME"]
