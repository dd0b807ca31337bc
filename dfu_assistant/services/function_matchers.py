"""
Function Matcher Interface.

Defines the contract for recognising candidate integration functions in the
text of a header file. The Workspace Prober only sees this interface, so a
real static analyser can replace the substring heuristic later.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class FunctionMatches:
    memory_functions: List[str] = field(default_factory=list)
    dataset_functions: List[str] = field(default_factory=list)


class FunctionMatcher(ABC):
    @abstractmethod
    def match(self, text: str) -> FunctionMatches:
        """
        Returns the memory-allocation and dataset-loading function names
        found in one file's contents.
        """
        pass


# marker substring -> function name to suggest
MEMORY_MARKERS: Dict[str, str] = {
    "ShmM_MapOwner": "ShmM_MapOwner",
}

DATASET_MARKERS: Dict[str, str] = {
    "Per_DS_Read": "Per_DS_ReadDSElementDMIU",
}


class MarkerSubstringMatcher(FunctionMatcher):
    """
    Plain substring scan for well-known markers. No parsing: a marker inside
    a comment counts as a hit.
    """

    def __init__(
        self,
        memory_markers: Optional[Dict[str, str]] = None,
        dataset_markers: Optional[Dict[str, str]] = None,
    ):
        self.memory_markers = dict(MEMORY_MARKERS if memory_markers is None else memory_markers)
        self.dataset_markers = dict(DATASET_MARKERS if dataset_markers is None else dataset_markers)

    def match(self, text: str) -> FunctionMatches:
        return FunctionMatches(
            memory_functions=[
                name for marker, name in self.memory_markers.items() if marker in text
            ],
            dataset_functions=[
                name for marker, name in self.dataset_markers.items() if marker in text
            ],
        )
