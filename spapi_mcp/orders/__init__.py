"""Orders API tools (2026-01-01 and v0)."""
