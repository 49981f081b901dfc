"""Command line front end for labelexpr."""

from __future__ import annotations

from .main import cli

__all__ = ["cli"]
