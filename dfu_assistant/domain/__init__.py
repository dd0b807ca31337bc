"""
Domain Layer - Static Data Models

Defines the platforms, deployment variants, catalog entries and workspace
analysis results the assistant reasons about.
"""

from dfu_assistant.domain.models import (
    CatalogEntry,
    Platform,
    Variant,
    WorkspaceAnalysis,
)

__all__ = [
    "CatalogEntry",
    "Platform",
    "Variant",
    "WorkspaceAnalysis",
]
