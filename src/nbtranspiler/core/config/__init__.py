"""Configuration management for nbtranspiler."""

from .config_loader import ConfigLoader
from .transpiler_config import TranspilerConfig

__all__ = ["ConfigLoader", "TranspilerConfig"]
