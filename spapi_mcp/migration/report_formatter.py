"""Markdown reports for code analysis and full migration runs."""

from typing import List

from spapi_mcp.migration.migration_data import MigrationData
from spapi_mcp.migration.models import CodeAnalysis

DOCS_URL = "https://developer-docs.amazon.com/sp-api/docs/orders-api-v1-reference"
MIGRATION_GUIDE_URL = "https://developer-docs.amazon.com/sp-api/docs/orders-api-v0-to-v1-migration-guide"

ANALYSIS_CHECKLIST = (
    "Review all deprecated endpoints and plan V0 fallback strategy",
    "Update attribute references to the new nested structure",
    "Add `includedData` parameter where needed (BUYER, RECIPIENT, etc.)",
    "Update error handling for new response formats",
    "Test with sandbox environment before production",
    "Update types/interfaces for the new response models",
    "Monitor for V0 API deprecation announcements",
)

TESTING_RECOMMENDATIONS = (
    "**Unit Tests:** Update test cases to match the new response structure",
    "**Integration Tests:** Test with the SP-API sandbox environment",
    "**Error Handling:** Verify error responses match the new format",
    "**Performance:** Monitor API response times and adjust `includedData` usage",
    "**Backward Compatibility:** Ensure V0 fallback works for unsupported operations",
)


def _checklist(items) -> List[str]:
    return [f"- [ ] {item}" for item in items]


def format_analysis_report(analysis: CodeAnalysis, data: MigrationData) -> str:
    lines = [
        "# 🔍 Migration Analysis Report",
        "",
        f"**Migration:** {data.source_version} → {data.target_version}",
        "",
        "## 📊 Summary",
        "",
        f"- **API Calls Found:** {len(analysis.methods_found)}",
        f"- **Attributes to Update:** {len(analysis.attribute_mappings)}",
        f"- **Breaking Changes:** {len(analysis.breaking_changes)}",
        f"- **Deprecated Endpoints:** {len(analysis.deprecated_endpoints)}",
        "",
    ]

    if analysis.deprecated_endpoints:
        lines.append(f"## ❌ Deprecated Endpoints (unavailable in {data.target_version})")
        lines.append("")
        for endpoint in analysis.deprecated_endpoints:
            lines.append(f"- **{endpoint.method}** → {endpoint.replacement}")
        lines.append("")

    if analysis.breaking_changes:
        lines.append("## ⚠️ Breaking Changes")
        lines.append("")
        for index, change in enumerate(analysis.breaking_changes, start=1):
            lines.append(f"{index}. **{change.change}**")
            lines.append(f"   {change.explanation}")
            lines.append("")

    if analysis.attribute_mappings:
        lines.append("## 🗺️ Attribute Mappings")
        lines.append("")
        for mapping in analysis.attribute_mappings:
            lines.append(f"- `{mapping.source}` → `{mapping.target}`")
        lines.append("")

    if analysis.methods_found:
        lines.append("## 🔌 API Methods Detected")
        lines.append("")
        for method in analysis.methods_found:
            mapping = data.method_mapping.get(method)
            status = mapping.status_label if mapping else "Unknown"
            lines.append(f"- **{method}** - {status}")
        lines.append("")

    lines.append("## ✅ Migration Checklist")
    lines.append("")
    lines.extend(_checklist(ANALYSIS_CHECKLIST))
    lines.append("")
    return "\n".join(lines)


def format_migration_report(
    analysis: CodeAnalysis,
    refactored_code: str,
    data: MigrationData,
    language: str = "javascript",
) -> str:
    """Analysis report followed by the refactored code and follow-up guidance."""
    lines = [
        format_analysis_report(analysis, data),
        "---",
        "",
        "## 💻 Refactored Code",
        "",
        f"```{language}",
        refactored_code,
        "```",
        "",
        "## 🧪 Testing Recommendations",
        "",
    ]
    for index, item in enumerate(TESTING_RECOMMENDATIONS, start=1):
        lines.append(f"{index}. {item}")
    lines.extend([
        "",
        "## 📚 Additional Resources",
        "",
        f"- [SP-API Orders API Reference]({DOCS_URL})",
        f"- [Migration Guide]({MIGRATION_GUIDE_URL})",
        "- Call `migration_assistant` without `source_code` for the general migration guide",
        "",
    ])
    return "\n".join(lines)
