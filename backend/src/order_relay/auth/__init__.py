"""Inbound authentication for the relay."""

from .api_key import get_provided_key, require_api_key

__all__ = ["get_provided_key", "require_api_key"]
