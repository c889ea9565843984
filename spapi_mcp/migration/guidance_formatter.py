"""General migration guide, rendered when no source code is supplied."""

from typing import List, Sequence

from spapi_mcp.migration.migration_data import LEGACY_PATH_PREFIX, TARGET_PATH_PREFIX, MigrationData
from spapi_mcp.migration.report_formatter import DOCS_URL, MIGRATION_GUIDE_URL

PREVIEW_LIMIT = 5

HIGHLIGHTED_MAPPINGS = (
    "AmazonOrderId",
    "OrderStatus",
    "IsPrime",
    "IsBusinessOrder",
    "OrderTotal",
    "ShippingAddress",
    "BuyerInfo.BuyerEmail",
    "QuantityShipped",
)

GUIDE_CHECKLIST = (
    "Review API method availability (some require V0)",
    "Update attribute references to new nested structure",
    "Replace boolean flags with programs array checks",
    "Add `includedData` parameter for additional data",
    f"Update endpoint URLs from `{LEGACY_PATH_PREFIX}` to `{TARGET_PATH_PREFIX}`",
    "Update error handling for new response formats",
    "Test with sandbox environment",
    "Update types/interfaces for the new response models",
    "Plan V0 fallback for unsupported operations",
)

_CODE_EXAMPLES = """## 💻 Code Examples

### Checking Prime Orders

**V0:**
```javascript
if (order.IsPrime) {
  // handle prime order
}
```

**2026-01-01:**
```javascript
if (order.programs?.includes('PRIME')) {
  // handle prime order
}
```

### Getting Order Status

**V0:**
```javascript
const status = order.OrderStatus;
```

**2026-01-01:**
```javascript
const status = order.fulfillment.fulfillmentStatus;
```

### Search Orders (2026-01-01)

```javascript
const response = await fetch(
  'https://sellingpartnerapi-na.amazon.com/orders/2026-01-01/orders?' +
  new URLSearchParams({
    createdAfter: '2025-12-01T00:00:00Z',
    marketplaceIds: 'ATVPDKIKX0DER',
    includedData: 'BUYER,RECIPIENT,FULFILLMENT'
  }),
  { headers: { 'x-amz-access-token': accessToken } }
);
```
"""


def preview(items: Sequence[str], limit: int = PREVIEW_LIMIT) -> List[str]:
    """Bullet lines for the first *limit* items plus a remainder count."""
    lines = [f"- {item}" for item in items[:limit]]
    if len(items) > limit:
        lines.append(f"- ... and {len(items) - limit} more")
    return lines


def format_general_guidance(data: MigrationData) -> str:
    lines = [
        f"# 🔄 Orders API Migration Guide: {data.source_version} → {data.target_version}",
        "",
        "## 📋 Overview",
        "",
        f"This guide helps you migrate from {data.source_version} to {data.target_version}.",
        "",
        "**Key Changes:**",
        "- New nested data structure (buyer, recipient, fulfillment, etc.)",
        "- Enhanced data sets with `includedData` parameter",
        "- New programs array replaces boolean flags",
        "- Better financial breakdown with proceeds and expense tracking",
        "- Some V0 APIs have no counterpart (continue using V0)",
        "",
        "## 🔌 API Method Mapping",
        "",
        f"### ✅ Available in {data.target_version}:",
        "",
    ]
    for method, mapping in data.available_methods():
        lines.append(f"- **{method}** → {mapping.target}")
        lines.append(f"  {mapping.notes}")
        lines.append("")

    lines.append(f"### ❌ NOT Available in {data.target_version} (Continue using V0):")
    lines.append("")
    for method, mapping in data.unavailable_methods():
        lines.append(f"- **{method}**")
        lines.append(f"  {mapping.notes}")
        lines.append("")

    lines.append("## 🗺️ Key Attribute Mappings")
    lines.append("")
    lines.append("Common V0 attributes and their new equivalents:")
    lines.append("")
    for attribute in HIGHLIGHTED_MAPPINGS:
        target = data.attribute_mapping.get(attribute)
        if target:
            lines.append(f"- `{attribute}` → `{target}`")
    lines.append("")
    lines.append(f"Complete mapping list covers {len(data.attribute_mapping)} attributes.")
    lines.append("")

    lines.append("## ⚠️ Breaking Changes")
    lines.append("")
    lines.append(f"### Deprecated Attributes ({len(data.deprecated_attributes)})")
    lines.append("")
    lines.append("These attributes are removed with no replacement:")
    lines.append("")
    lines.extend(preview(data.deprecated_attributes))
    lines.append("")
    lines.append(f"### Not Supported Attributes ({len(data.unsupported_attributes)})")
    lines.append("")
    lines.append("These attributes are not available in the current release:")
    lines.append("")
    lines.extend(preview(data.unsupported_attributes))
    lines.append("")

    lines.append("## 🆕 New Features")
    lines.append("")
    lines.extend(f"- {feature}" for feature in data.new_capabilities)
    lines.append("")

    lines.append(_CODE_EXAMPLES)

    lines.append("## ✅ Migration Checklist")
    lines.append("")
    lines.extend(f"- [ ] {item}" for item in GUIDE_CHECKLIST)
    lines.append("")

    lines.extend([
        "## 📚 Resources",
        "",
        f"- [SP-API Orders API Reference]({DOCS_URL})",
        f"- [Migration Guide]({MIGRATION_GUIDE_URL})",
        "- [SP-API Developer Guide](https://developer-docs.amazon.com/sp-api/)",
        "",
        "## 🔍 Need More Help?",
        "",
        "- **Code Analysis:** Provide your source code for detailed analysis and automated refactoring",
        "- **Specific Attributes:** Ask about specific V0 attributes for detailed mapping",
        "- **API Methods:** Ask about specific V0 API methods for migration guidance",
    ])
    return "\n".join(lines)
