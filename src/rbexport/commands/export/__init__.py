"""
Export commands module.
"""

from .manager import app

__all__ = ["app"]
