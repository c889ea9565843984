"""Lexical detection of legacy API usage in arbitrary source text.

Matching is whole-word and regex based, with no parsing. Tracked names used
in unrelated contexts are reported too, and calls made through aliases are
missed.
"""

import functools
import logging
import re
from typing import Tuple

from spapi_mcp.migration.migration_data import MigrationData
from spapi_mcp.migration.models import (
    AttributeMappingFound,
    BreakingChange,
    CodeAnalysis,
    DeprecatedEndpoint,
)

logger = logging.getLogger("spapi.migration.analyzer")


@functools.lru_cache(maxsize=512)
def word_pattern(name: str):
    """Compiled whole-word pattern for *name*; dots match literally."""
    return re.compile(r"\b" + re.escape(name) + r"\b")


def contains_word(text: str, name: str) -> bool:
    return word_pattern(name).search(text) is not None


@functools.lru_cache(maxsize=32)
def longest_first_pattern(names: Tuple[str, ...]):
    """Whole-word alternation over *names*, longest tried first.

    A dotted name that extends a shorter one (``A.B.C`` over ``A.B``) is
    matched as a unit and never as its prefix.
    """
    ordered = sorted(names, key=len, reverse=True)
    return re.compile(r"\b(?:" + "|".join(re.escape(n) for n in ordered) + r")\b")


def analyze_code(source_text: str, data: MigrationData) -> CodeAnalysis:
    """Scan *source_text* for methods and attributes tracked by *data*.

    Methods are reported in knowledge-base order, not file order, so the
    same input always yields the same analysis.
    """
    analysis = CodeAnalysis()

    for method, mapping in data.method_mapping.items():
        if not contains_word(source_text, method):
            continue
        analysis.methods_found.append(method)
        if mapping.is_available:
            continue
        analysis.deprecated_endpoints.append(
            DeprecatedEndpoint(method=method, replacement=mapping.target)
        )
        analysis.breaking_changes.append(BreakingChange(
            change=f"{method} has no replacement in {data.target_version}",
            explanation=mapping.notes,
        ))

    for attribute in data.deprecated_attributes:
        if contains_word(source_text, attribute):
            analysis.breaking_changes.append(BreakingChange(
                change=f"Deprecated attribute: {attribute}",
                explanation=(
                    f"{attribute} is removed in {data.target_version} "
                    "and has no replacement"
                ),
            ))

    mapped = set(longest_first_pattern(tuple(data.attribute_mapping)).findall(source_text))
    for source, target in data.attribute_mapping.items():
        if source in mapped:
            analysis.attribute_mappings.append(AttributeMappingFound(
                source=source,
                target=target,
                note=f"Mapped from {source} to {target}",
            ))

    logger.debug(
        "Analysis: %d methods, %d deprecated endpoints, %d breaking changes, %d mappings",
        len(analysis.methods_found),
        len(analysis.deprecated_endpoints),
        len(analysis.breaking_changes),
        len(analysis.attribute_mappings),
    )
    return analysis
