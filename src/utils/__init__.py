"""Shared helpers (configuration loading)."""

from .config import load_config, DEFAULT_CONFIG

__all__ = ['load_config', 'DEFAULT_CONFIG']
