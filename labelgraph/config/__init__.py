"""Configuration package."""

from labelgraph.config.settings import CoreSettings

settings = CoreSettings()

__all__ = ["CoreSettings", "settings"]
