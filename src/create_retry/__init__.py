"""Retry the console "Create" action until the instance is created."""

from __future__ import annotations

__version__ = "0.1.0"
