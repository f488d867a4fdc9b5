"""Command-line interface for contactcore."""

from .main import main, load_contacts

__all__ = ["main", "load_contacts"]
