"""Shared console for the problem index CLI."""

from __future__ import annotations

from rich.console import Console

console = Console()

__all__ = ["console"]
