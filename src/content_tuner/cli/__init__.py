"""
CLI module for content-tuner.

Provides command-line interface using Typer:
- score: Report the deviation score of the active coefficients
- config: Configuration management
"""

from content_tuner.cli.main import app

__all__ = ["app"]
