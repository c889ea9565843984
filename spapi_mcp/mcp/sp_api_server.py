"""SP-API developer MCP server: credential, order and migration tools.

Usage:
    sp-api-dev-mcp [--config PATH] [--log-level LEVEL]
    python -m spapi_mcp.mcp.sp_api_server

.mcp.json entry:
    "sp-api-dev-mcp": {
        "command": "sp-api-dev-mcp",
        "env": {
            "SP_API_CLIENT_ID": "...",
            "SP_API_CLIENT_SECRET": "...",
            "SP_API_REFRESH_TOKEN": "...",
            "SP_API_BASE_URL": "https://sellingpartnerapi-na.amazon.com"
        }
    }
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv

from spapi_mcp import __version__
from spapi_mcp.auth.credential_store import CredentialStore
from spapi_mcp.auth.credential_tools import CredentialTools
from spapi_mcp.config import load_config
from spapi_mcp.context import ServerContext
from spapi_mcp.mcp.base_server import MCPServer, configure_logging
from spapi_mcp.mcp.tool_registry import TOOL_REGISTRY
from spapi_mcp.migration.migration_assistant import MigrationAssistantTool
from spapi_mcp.orders.orders_api_tools import OrdersApiTools

logger = logging.getLogger("spapi.mcp.server")


class SPAPIDevMCPServer(MCPServer):
    """MCP server wiring the registry's tools to their components."""

    def __init__(self, context: Optional[ServerContext] = None, **kwargs):
        super().__init__(name="sp-api-dev-mcp", version=__version__, **kwargs)
        self.context = context or ServerContext()
        self.components: Dict[str, Any] = {
            "credentials": CredentialTools(self.context),
            "orders": OrdersApiTools(self.context),
            "migration": MigrationAssistantTool(),
        }
        self._register_all()

    def _resolve_handler(self, entry: dict) -> Callable:
        component = self.components[entry["component"]]
        return getattr(component, entry["handler"])

    def _register_all(self) -> None:
        for tool_name, entry in TOOL_REGISTRY.items():
            self.register_tool(
                name=tool_name,
                description=entry["description"],
                args_model=entry["args_model"],
                handler=self._resolve_handler(entry),
            )
        logger.info("Registered %d tools", len(TOOL_REGISTRY))


def create_server(context: Optional[ServerContext] = None, **kwargs) -> SPAPIDevMCPServer:
    """Factory for the SP-API developer MCP server."""
    return SPAPIDevMCPServer(context=context, **kwargs)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="SP-API developer MCP server (JSON-RPC 2.0 over stdio)")
    parser.add_argument("--config", type=Path, help="YAML config path (default: args/sp_api_config.yaml)")
    parser.add_argument("--log-level", help="Override the configured log level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)

    load_dotenv()
    config = load_config(args.config)
    if args.log_level:
        config["log_level"] = args.log_level.upper()
    configure_logging(config.get("log_level", "INFO"))

    store = CredentialStore.from_env(default_base_url=config["default_base_url"])
    if not store.is_configured():
        logger.info("No complete credentials in environment; use the credentials tool to configure")

    server = create_server(ServerContext(config=config, credential_store=store))
    server.run()


if __name__ == "__main__":
    main()
