"""Configuration module using Pydantic Settings.

Usage:
    from resgraph.config import CompilerSettings

    settings = CompilerSettings(namespace="site")
"""

from resgraph.config.settings import CompilerSettings

__all__ = [
    "CompilerSettings",
]
