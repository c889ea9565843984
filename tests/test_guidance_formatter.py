"""Tests for the general migration guide."""

import pytest

from spapi_mcp.migration.guidance_formatter import (
    GUIDE_CHECKLIST,
    HIGHLIGHTED_MAPPINGS,
    PREVIEW_LIMIT,
    format_general_guidance,
    preview,
)


class TestPreview:

    def test_short_list_not_truncated(self):
        assert preview(["a", "b"]) == ["- a", "- b"]

    def test_exactly_limit(self):
        items = [str(i) for i in range(PREVIEW_LIMIT)]
        assert len(preview(items)) == PREVIEW_LIMIT

    @pytest.mark.parametrize("count", [6, 8, 32])
    def test_truncated(self, count):
        lines = preview([f"attr{i}" for i in range(count)])
        assert len(lines) == PREVIEW_LIMIT + 1
        assert lines[-1] == f"- ... and {count - PREVIEW_LIMIT} more"


class TestGeneralGuidance:

    @pytest.fixture
    def guide(self, migration_data):
        return format_general_guidance(migration_data)

    def test_title(self, guide):
        assert "Migration Guide" in guide
        assert "orders-v0 → orders-2026-01-01" in guide

    def test_lists_available_and_unavailable(self, guide, migration_data):
        assert "## 🔌 API Method Mapping" in guide
        available_at = guide.index("### ✅ Available")
        unavailable_at = guide.index("### ❌ NOT Available")
        for method, _ in migration_data.available_methods():
            assert available_at < guide.index(f"- **{method}** →") < unavailable_at
        for method, mapping in migration_data.unavailable_methods():
            assert guide.index(f"- **{method}**\n") > unavailable_at
            assert mapping.notes in guide

    def test_highlighted_mappings(self, guide, migration_data):
        for attribute in HIGHLIGHTED_MAPPINGS:
            assert f"- `{attribute}` → `{migration_data.attribute_mapping[attribute]}`" in guide
        assert f"covers {len(migration_data.attribute_mapping)} attributes" in guide

    def test_previews_truncated(self, guide, migration_data):
        deprecated = migration_data.deprecated_attributes
        unsupported = migration_data.unsupported_attributes
        assert f"- ... and {len(deprecated) - PREVIEW_LIMIT} more" in guide
        assert f"- ... and {len(unsupported) - PREVIEW_LIMIT} more" in guide
        assert f"- {deprecated[PREVIEW_LIMIT - 1]}\n" in guide
        assert f"- {deprecated[PREVIEW_LIMIT]}\n" not in guide

    def test_new_capabilities(self, guide, migration_data):
        for feature in migration_data.new_capabilities:
            assert f"- {feature}" in guide

    def test_examples_checklist_and_links(self, guide):
        assert "## 💻 Code Examples" in guide
        assert "order.programs?.includes('PRIME')" in guide
        for item in GUIDE_CHECKLIST:
            assert f"- [ ] {item}" in guide
        assert "https://developer-docs.amazon.com/sp-api/" in guide
