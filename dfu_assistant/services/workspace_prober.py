"""
Workspace Prober.

Best-effort, read-only inspection of the user's project. The results only
pre-fill defaults and suggestions in the wizard, so every operation swallows
per-file problems (treated as "no match") and never fails the turn.

Each call rescans the file tree; nothing is cached between calls. File
system work runs in a worker thread and is awaited in sequence, which keeps
the order of detected names deterministic.
"""

import asyncio
import logging
import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..domain.models import Platform, Variant, WorkspaceAnalysis
from .exceptions import WorkspaceProbeError
from .function_matchers import FunctionMatcher, MarkerSubstringMatcher

logger = logging.getLogger(__name__)

EXCLUDED_DIRS = frozenset({"node_modules", ".git"})

ENTRY_POINT_GLOBS = ("main.c", "*/main.c", "PreOS.c", "*/PreOS.c")
HEADER_GLOBS = ("*.h",)
INTEGRATION_GLOBS = (
    "*1800-EcuIntegration/*/dmiu/*.c",
    "*1800-EcuIntegration/*/dmiu/*.h",
)

MAX_ENTRY_POINTS = 5
MAX_HEADER_SEARCH = 100
MAX_HEADERS_SCANNED = 50
MAX_INTEGRATION_FILES = 10

# Checked in order for every entry-point file; first marker found wins.
PLATFORM_MARKERS: Tuple[Tuple[Platform, Tuple[str, ...]], ...] = (
    (Platform.POSIX, ("PFSW_BUILD_OS_POSIX", "ShmM")),
    (Platform.AUTOSAR, ("PFSW_BUILD_OS_AUTOSAR", "EcuM_Init", "Os_Cfg.h")),
)


class WorkspaceProber:
    def __init__(
        self,
        root: str | Path,
        detection_rules: Sequence[Tuple[str, Variant]] = (),
        matcher: Optional[FunctionMatcher] = None,
    ):
        self.root = Path(root)
        self.detection_rules = list(detection_rules)
        self.matcher = matcher or MarkerSubstringMatcher()

    async def analyze(self) -> WorkspaceAnalysis:
        """Runs every probe, one after the other."""
        memory_functions, dataset_functions = await self.find_candidate_functions()
        return WorkspaceAnalysis(
            detected_platform=await self.detect_platform(),
            detected_variant=await self.detect_variant(),
            memory_functions=memory_functions,
            dataset_functions=dataset_functions,
            existing_integration_files=await self.find_existing_integration(),
        )

    # ==========================================================================
    # Probes
    # ==========================================================================

    async def detect_variant(self) -> Optional[Variant]:
        """First (glob, variant) rule with any matching file wins."""
        if not self.detection_rules:
            return None
        files = await self._find_files(("*",))
        for pattern, variant in self.detection_rules:
            if any(fnmatchcase(path, pattern) for path in files):
                logger.debug(f"Variant {variant.value} detected via '{pattern}'")
                return variant
        return None

    async def detect_platform(self) -> Optional[Platform]:
        candidates = await self._find_files(ENTRY_POINT_GLOBS, limit=MAX_ENTRY_POINTS)
        for relative_path in candidates:
            text = await self._read_or_none(relative_path)
            if text is None:
                continue
            for platform, markers in PLATFORM_MARKERS:
                if any(marker in text for marker in markers):
                    logger.debug(f"Platform {platform.value} detected in {relative_path}")
                    return platform
        return None

    async def find_candidate_functions(self) -> Tuple[List[str], List[str]]:
        """(memory function names, dataset function names), each de-duplicated."""
        memory_functions: List[str] = []
        dataset_functions: List[str] = []

        headers = await self._find_files(HEADER_GLOBS, limit=MAX_HEADER_SEARCH)
        for relative_path in headers[:MAX_HEADERS_SCANNED]:
            text = await self._read_or_none(relative_path)
            if text is None:
                continue
            matches = self.matcher.match(text)
            _extend_unique(memory_functions, matches.memory_functions)
            _extend_unique(dataset_functions, matches.dataset_functions)

        return memory_functions, dataset_functions

    async def find_existing_integration(self) -> List[str]:
        return await self._find_files(INTEGRATION_GLOBS, limit=MAX_INTEGRATION_FILES)

    # ==========================================================================
    # File System Helpers
    # ==========================================================================

    async def _find_files(
        self, patterns: Sequence[str], limit: Optional[int] = None
    ) -> List[str]:
        try:
            return await asyncio.to_thread(self._walk, patterns, limit)
        except OSError as e:
            logger.warning(f"Workspace search under {self.root} failed: {e}")
            return []

    def _walk(self, patterns: Sequence[str], limit: Optional[int]) -> List[str]:
        """Relative POSIX paths of matching files, in a stable (sorted) order."""
        found: List[str] = []
        if not self.root.is_dir():
            return found

        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = sorted(d for d in dirnames if d not in EXCLUDED_DIRS)
            for filename in sorted(filenames):
                relative = Path(dirpath, filename).relative_to(self.root).as_posix()
                if any(fnmatchcase(relative, pattern) for pattern in patterns):
                    found.append(relative)
                    if limit is not None and len(found) >= limit:
                        return found
        return found

    async def _read_or_none(self, relative_path: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._read_text, relative_path)
        except WorkspaceProbeError as e:
            logger.debug(f"Skipping unreadable file: {e}")
            return None

    def _read_text(self, relative_path: str) -> str:
        try:
            return (self.root / relative_path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise WorkspaceProbeError(f"{relative_path}: {e}") from e


def _extend_unique(target: List[str], names: Iterable[str]) -> None:
    for name in names:
        if name not in target:
            target.append(name)


def describe_analysis(analysis: WorkspaceAnalysis) -> Dict[str, object]:
    """Flat summary used in log lines."""
    return {
        "platform": analysis.detected_platform.value if analysis.detected_platform else None,
        "variant": analysis.detected_variant.value if analysis.detected_variant else None,
        "memory_functions": len(analysis.memory_functions),
        "dataset_functions": len(analysis.dataset_functions),
        "integration_files": len(analysis.existing_integration_files),
    }
