"""Analysis result models produced by the code analyzer."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class DeprecatedEndpoint:
    """A legacy method found in the source with no counterpart in the target."""

    method: str
    replacement: str


@dataclass
class BreakingChange:
    change: str
    explanation: str


@dataclass
class AttributeMappingFound:
    source: str
    target: str
    note: str


@dataclass
class CodeAnalysis:
    """Result of one analyzer run. Lists keep detection order."""

    deprecated_endpoints: List[DeprecatedEndpoint] = field(default_factory=list)
    breaking_changes: List[BreakingChange] = field(default_factory=list)
    attribute_mappings: List[AttributeMappingFound] = field(default_factory=list)
    methods_found: List[str] = field(default_factory=list)
