"""``credentials`` tool: configure, inspect, or clear SP-API credentials at runtime.

Credentials set here are held in memory only and are gone when the server
restarts.
"""

import logging
from typing import Any, Dict, List

from spapi_mcp.context import ServerContext
from spapi_mcp.schemas import CredentialToolArgs, error_response, text_response

logger = logging.getLogger("spapi.auth.tools")

_NO_CREDENTIALS_HELP = """⚠️ **No credentials provided**

Please provide at least one of the following:
- `clientId`: Your SP-API LWA Client ID
- `clientSecret`: Your SP-API LWA Client Secret
- `refreshToken`: Your SP-API Refresh Token
- `baseUrl`: API endpoint (na, eu, fe, or full URL)

**Example:**
```
Configure my SP-API credentials:
- Client ID: amzn1.application-oa2-client.xxx
- Client Secret: xxx
- Refresh Token: Atzr|xxx
- Region: na
```"""

_REGION_HELP = """**Available Regions:**
- `na` - North America (US, CA, MX, BR)
- `eu` - Europe (UK, DE, FR, IT, ES, etc.)
- `fe` - Far East (JP, AU, SG, IN)"""


class CredentialTools:
    """Handler for the unified ``credentials`` tool."""

    def __init__(self, context: ServerContext):
        self.context = context

    @property
    def store(self):
        return self.context.credentials

    def resolve_base_url(self, value: str) -> str:
        """Map a region shorthand (na, eu, fe, north_america, ...) to its base URL."""
        regions = self.context.config.get("regions", {})
        return regions.get(value.strip().lower(), value)

    def handle_credentials(self, args: CredentialToolArgs) -> Dict[str, Any]:
        if args.action == "configure":
            return self.configure_credentials(args)
        if args.action == "status":
            return self.get_credential_status()
        if args.action == "clear":
            return self.clear_credentials()
        return error_response(
            f"❌ Unknown action: {args.action}. Use 'configure', 'status', or 'clear'."
        )

    def configure_credentials(self, args: CredentialToolArgs) -> Dict[str, Any]:
        updates = {}
        if args.clientId:
            updates["clientId"] = args.clientId
        if args.clientSecret:
            updates["clientSecret"] = args.clientSecret
        if args.refreshToken:
            updates["refreshToken"] = args.refreshToken
        if args.baseUrl:
            updates["baseUrl"] = self.resolve_base_url(args.baseUrl)

        if not updates:
            return error_response(_NO_CREDENTIALS_HELP)

        self.store.set_credentials(**updates)
        status = self.store.get_status()
        masked = self.store.get_masked_credentials()

        if status["isConfigured"]:
            headline = "✅ **Credentials fully configured!** You can now use the Orders API tools."
        else:
            headline = "⚠️ **Credentials partially configured.** Some fields are still missing."

        lines = [
            headline,
            "",
            f"**Updated:** {', '.join(updates)}",
            "",
            "**Current Configuration:**",
            "| Field | Status |",
            "|-------|--------|",
            f"| Client ID | {masked['clientId']} |",
            f"| Client Secret | {masked['clientSecret']} |",
            f"| Refresh Token | {masked['refreshToken']} |",
            f"| Base URL | {status['baseUrl']} |",
            "",
        ]
        if not status["isConfigured"]:
            lines.append(self._missing_fields_message(status))
            lines.append("")
        lines.append(
            "**Security Note:** Credentials are stored in memory only and will be "
            "cleared when the MCP server restarts."
        )
        return text_response("\n".join(lines))

    def get_credential_status(self) -> Dict[str, Any]:
        status = self.store.get_status()
        masked = self.store.get_masked_credentials()

        def mark(flag: bool) -> str:
            return "✅" if flag else "❌"

        if status["isConfigured"]:
            summary = "✅ Fully configured - ready to use Orders API"
        else:
            summary = "❌ Not fully configured - some credentials missing"

        lines = [
            "## 🔐 SP-API Credential Status",
            "",
            f"**Status:** {summary}",
            "",
            "**Configuration:**",
            "| Field | Status | Value |",
            "|-------|--------|-------|",
            f"| Client ID | {mark(status['hasClientId'])} | {masked['clientId']} |",
            f"| Client Secret | {mark(status['hasClientSecret'])} | {masked['clientSecret']} |",
            f"| Refresh Token | {mark(status['hasRefreshToken'])} | {masked['refreshToken']} |",
            f"| Base URL | ✅ | {status['baseUrl']} |",
            "",
        ]
        if status["configuredAt"]:
            lines.append(f"**Last Updated:** {status['configuredAt'].strftime('%Y-%m-%d %H:%M:%S UTC')}")
            lines.append("")
        if status["isConfigured"]:
            lines.append("**Ready to use:** search_orders, get_order, cancel_order, etc.")
        else:
            lines.append(self._missing_fields_message(status))
        lines.append("")
        lines.append(_REGION_HELP)
        return text_response("\n".join(lines))

    def clear_credentials(self) -> Dict[str, Any]:
        self.store.clear_credentials()
        return text_response(
            "🗑️ **Credentials Cleared**\n\n"
            "All SP-API credentials have been removed from memory.\n\n"
            "To reconfigure, use the `credentials` tool with action: 'configure'."
        )

    @staticmethod
    def _missing_fields_message(status: dict) -> str:
        missing: List[str] = []
        if not status["hasClientId"]:
            missing.append("clientId")
        if not status["hasClientSecret"]:
            missing.append("clientSecret")
        if not status["hasRefreshToken"]:
            missing.append("refreshToken")
        return (
            f"**Missing Fields:** {', '.join(missing)}\n\n"
            "To configure, use the `credentials` tool with action: 'configure':\n"
            "```\n"
            "Set my SP-API credentials:\n"
            "- Client ID: your_client_id\n"
            "- Client Secret: your_client_secret\n"
            "- Refresh Token: your_refresh_token\n"
            "```"
        )
