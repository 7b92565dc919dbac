"""
Configuration for the pattern lock engine.
"""

from .settings import PatternConfig, PatternConfigError

__all__ = ["PatternConfig", "PatternConfigError"]
