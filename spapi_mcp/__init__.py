"""Selling Partner API developer MCP server.

Order-management tools for the Orders API (2026-01-01 and legacy v0 paths)
plus a migration assistant that rewrites v0 client code for 2026-01-01.
"""

__version__ = "1.1.0"
