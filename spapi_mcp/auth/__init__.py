"""Credential storage and the token-cached SP-API client."""
