"""Web API for health-tracker."""

from .app import create_app

__all__ = ["create_app"]
