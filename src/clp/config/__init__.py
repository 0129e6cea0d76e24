"""Configuration package."""

from clp.config.settings import Settings

__all__ = ["Settings"]
