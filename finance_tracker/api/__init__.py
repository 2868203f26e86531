"""HTTP API package."""

from finance_tracker.api.app import create_app

__all__ = ["create_app"]
