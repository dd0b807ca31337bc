"""
Domain Layer - Static Data Models

This module defines the core domain model of a DMIU integration: the target
platforms, the named deployment variants with their canonical integration
paths, and the snapshot the Workspace Prober produces from a user's project.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class Platform(str, Enum):
    """
    Operating environment the integration layer is generated for.

    POSIX: dmiu runs as a daemon, main() lives in 1800-EcuIntegration/main.c
    AUTOSAR: DMIU_Initialize() is called from the PreOS.c startup sequence
    """
    POSIX = "posix"
    AUTOSAR = "autosar"


class Variant(str, Enum):
    """
    Closed set of deployment configurations (board + software stack).
    GENERIC is the fallback when the workspace matches no known variant.
    """
    S32G_LINUX = "s32g_linux"
    S32G_AUTOSAR = "s32g_autosar"
    TC397_AUTOSAR = "tc397_autosar"
    RCAR_QNX = "rcar_qnx"
    GENERIC = "generic"


@dataclass(frozen=True)
class CatalogEntry:
    """
    Immutable description of one deployment variant.

    Attributes:
        variant: Identifier of the variant.
        title: Human-readable name shown in the selection list.
        description: One-line summary of board and software stack.
        platform: Platform implied by the variant. None for GENERIC, where
            the platform is not known in advance.
        integration_path: Canonical relative directory for the generated
            dmiu sources. May contain the [PLATFORM] placeholder.
        detection_globs: Path patterns (fnmatch, relative to the workspace
            root) whose presence identifies this variant.
    """
    variant: Variant
    title: str
    description: str
    platform: Optional[Platform]
    integration_path: str
    detection_globs: Tuple[str, ...] = ()


@dataclass
class WorkspaceAnalysis:
    """
    Best-effort snapshot of the user's project. Recomputed on demand,
    never persisted. Every list holds each name at most once.
    """
    detected_platform: Optional[Platform] = None
    detected_variant: Optional[Variant] = None
    memory_functions: List[str] = field(default_factory=list)
    dataset_functions: List[str] = field(default_factory=list)
    existing_integration_files: List[str] = field(default_factory=list)
