"""MCP stdio transport, tool registry and server entry point."""
