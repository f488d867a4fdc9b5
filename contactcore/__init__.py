"""Contact deduplication and relationship network analysis.

This package computes, from an in-memory snapshot of field-operations contacts:
- Groups of probable duplicate contacts with a suggested merged record
- A weighted relationship graph with clusters, metrics and paths
- A force-directed 2-D layout of that graph for drawing
"""

from .models import Contact, ContactKind, ShiftType
from .config import ConfigManager, EngineConfig
from .engine import ContactAnalysisEngine
from .error_handling import (
    ContactCoreError,
    ValidationError,
    ConfigurationError,
    MergeError,
)

__all__ = [
    "Contact",
    "ContactKind",
    "ShiftType",
    "ConfigManager",
    "EngineConfig",
    "ContactAnalysisEngine",
    "ContactCoreError",
    "ValidationError",
    "ConfigurationError",
    "MergeError",
]

__version__ = "1.0.0"
