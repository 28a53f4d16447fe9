"""
genelib - Source Package

This package contains the genelib evolution engine and the process-level
configuration and observability setup it shares.
"""

__version__ = "1.0.0"

# Package-level imports for convenience
from src.core.config import settings

__all__ = [
    "settings",
    "__version__"
]
