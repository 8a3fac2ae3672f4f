"""Theme schema package - typed models for table styling.

- theme.py: Theme, ColumnKind and ThemedTable dataclasses
- loader.py: YAML serialization/deserialization of Theme
"""

from .loader import dump_theme, load_theme, save_theme
from .theme import ColumnKind, Theme, ThemedTable

__all__ = [
    # Models
    "ColumnKind",
    "Theme",
    "ThemedTable",
    # Loader
    "dump_theme",
    "load_theme",
    "save_theme",
]
