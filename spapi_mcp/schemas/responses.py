"""Uniform MCP tool result shape: ``{content: [{type: "text", text}], isError?}``."""

from typing import Any, Dict


def text_response(text: str) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": text}]}


def error_response(text: str) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "isError": True}


def is_tool_response(value: Any) -> bool:
    """True if *value* already has the MCP tool result shape."""
    return (
        isinstance(value, dict)
        and isinstance(value.get("content"), list)
        and all(isinstance(item, dict) and "type" in item for item in value["content"])
    )
