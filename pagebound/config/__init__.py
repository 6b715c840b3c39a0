"""
配置模块
"""

from .settings import settings, Settings
from .logging import setup_logging

__all__ = ["settings", "Settings", "setup_logging"]
