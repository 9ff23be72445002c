"""CLI module for agent studio."""

from .main import main

__all__ = ["main"]
