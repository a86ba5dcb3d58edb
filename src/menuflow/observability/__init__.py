"""Observability module for Menuflow."""

from menuflow.observability.logging import setup_logging

__all__ = ["setup_logging"]
