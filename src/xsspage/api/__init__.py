"""HTTP adapter (Flask) for the xsspage engines."""

from xsspage.api.app import create_app

__all__ = ["create_app"]
