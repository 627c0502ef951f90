"""
Utility functions shared across the growth analysis package.
"""

from .labels import format_column_label, model_display_label

__all__ = [
    "format_column_label",
    "model_display_label",
]
