"""UI styling package."""

from .themes import ThemeManager, apply_theme

__all__ = ["ThemeManager", "apply_theme"]