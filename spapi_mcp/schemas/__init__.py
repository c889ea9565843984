"""Tool argument models and the shared tool result shape."""

from spapi_mcp.schemas.responses import error_response, is_tool_response, text_response
from spapi_mcp.schemas.tool_args import (
    CancelOrderArgs,
    ConfirmShipmentArgs,
    CredentialToolArgs,
    GetOrderArgs,
    GetOrderRegulatedInfoArgs,
    MigrationAssistantArgs,
    SearchOrdersArgs,
    UpdateShipmentStatusArgs,
    UpdateVerificationStatusArgs,
)

__all__ = [
    "CancelOrderArgs",
    "ConfirmShipmentArgs",
    "CredentialToolArgs",
    "GetOrderArgs",
    "GetOrderRegulatedInfoArgs",
    "MigrationAssistantArgs",
    "SearchOrdersArgs",
    "UpdateShipmentStatusArgs",
    "UpdateVerificationStatusArgs",
    "error_response",
    "is_tool_response",
    "text_response",
]
