"""Lambda handlers for the feedback intake API."""

from .api_handler import api_handler

__all__ = ["api_handler"]
