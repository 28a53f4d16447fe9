"""
Core functionality for genelib.

This package contains process-level configuration and observability setup
shared by every genelib component.
"""

from src.core.config import Settings, settings
from src.core.observability import configure_observability

__all__ = [
    "Settings",
    "settings",
    "configure_observability",
]
