"""``migration_assistant`` tool: guidance, analysis, or full rewrite.

Needs no credentials and makes no network calls.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from spapi_mcp.errors import UnsupportedMigrationError
from spapi_mcp.migration.code_analyzer import analyze_code
from spapi_mcp.migration.code_generator import generate_refactored_code
from spapi_mcp.migration.guidance_formatter import format_general_guidance
from spapi_mcp.migration.migration_data import (
    SOURCE_VERSION,
    TARGET_VERSION,
    MigrationData,
    get_orders_api_migration_data,
)
from spapi_mcp.migration.report_formatter import format_analysis_report, format_migration_report
from spapi_mcp.schemas import MigrationAssistantArgs, error_response, text_response

logger = logging.getLogger("spapi.migration")

DEFAULT_LANGUAGE = "javascript"

# (source, target) -> knowledge base loader
SUPPORTED_MIGRATIONS: Dict[Tuple[str, str], Callable[[], MigrationData]] = {
    (SOURCE_VERSION, TARGET_VERSION): get_orders_api_migration_data,
}


def format_unsupported(exc: UnsupportedMigrationError) -> str:
    lines = [f"❌ {exc}", "", "Supported migrations:"]
    lines.extend(f"- {source} → {target}" for source, target in exc.supported)
    return "\n".join(lines)


def run_migration(
    data: MigrationData,
    source_code: Optional[str],
    analysis_only: bool = False,
    language: Optional[str] = None,
) -> str:
    """Guidance when there is no source, otherwise an analysis or full migration report."""
    if not source_code:
        return format_general_guidance(data)

    analysis = analyze_code(source_code, data)
    if analysis_only:
        return format_analysis_report(analysis, data)

    refactored = generate_refactored_code(source_code, analysis, data.target_version)
    return format_migration_report(analysis, refactored, data, language=language or DEFAULT_LANGUAGE)


class MigrationAssistantTool:
    """Handler for the ``migration_assistant`` tool."""

    def __init__(self, migrations: Optional[Dict[Tuple[str, str], Callable[[], MigrationData]]] = None):
        self.migrations = migrations if migrations is not None else SUPPORTED_MIGRATIONS

    def resolve(self, source_version: str, target_version: str) -> MigrationData:
        loader = self.migrations.get((source_version, target_version))
        if loader is None:
            raise UnsupportedMigrationError(source_version, target_version, self.migrations.keys())
        return loader()

    def migration_assistant(self, args: MigrationAssistantArgs) -> Dict[str, Any]:
        try:
            data = self.resolve(args.source_version, args.target_version)
        except UnsupportedMigrationError as exc:
            logger.warning("Rejected migration request: %s", exc)
            return error_response(format_unsupported(exc))

        mode = "guidance" if not args.source_code else ("analysis" if args.analysis_only else "migration")
        logger.info("Migration %s → %s (%s)", args.source_version, args.target_version, mode)
        return text_response(run_migration(
            data,
            args.source_code,
            analysis_only=args.analysis_only,
            language=args.language,
        ))
