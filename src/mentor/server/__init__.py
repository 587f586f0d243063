"""HTTP backend: signup, login and prompt forwarding."""

from .app import create_app
from .config import ServerSettings

__all__ = ["ServerSettings", "create_app"]
