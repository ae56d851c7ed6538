"""Smart Set REST API."""

from smartset.api.app import create_app

__all__ = ["create_app"]
