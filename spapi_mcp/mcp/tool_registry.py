"""Declarative tool registry.

Maps tool name -> component key, handler method and argument model. The
server instantiates one object per component and binds handlers by name.
"""

from spapi_mcp.schemas import (
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

TOOL_REGISTRY = {
    # ---- Credentials ----
    "credentials": {
        "component": "credentials",
        "handler": "handle_credentials",
        "args_model": CredentialToolArgs,
        "description": (
            "Manage SP-API credentials. Use action 'configure' to set credentials, "
            "'status' to check the current configuration, or 'clear' to remove them. "
            "Credentials are held in memory only."
        ),
    },
    # ---- Orders API 2026-01-01 ----
    "search_orders": {
        "component": "orders",
        "handler": "search_orders",
        "args_model": SearchOrdersArgs,
        "description": (
            "Search orders with the Orders API 2026-01-01. Requires createdAfter or "
            "lastUpdatedAfter; supports status, channel and marketplace filters."
        ),
    },
    "get_order": {
        "component": "orders",
        "handler": "get_order",
        "args_model": GetOrderArgs,
        "description": "Get a single order by id with the Orders API 2026-01-01.",
    },
    "cancel_order": {
        "component": "orders",
        "handler": "cancel_order",
        "args_model": CancelOrderArgs,
        "description": "Request cancellation of an order with the Orders API 2026-01-01.",
    },
    # ---- Orders API v0 (no 2026-01-01 counterpart) ----
    "update_shipment_status": {
        "component": "orders",
        "handler": "update_shipment_status",
        "args_model": UpdateShipmentStatusArgs,
        "description": "Update the shipment status of an order (Orders API v0).",
    },
    "update_verification_status": {
        "component": "orders",
        "handler": "update_verification_status",
        "args_model": UpdateVerificationStatusArgs,
        "description": "Update the verification status of a regulated order (Orders API v0).",
    },
    "confirm_shipment": {
        "component": "orders",
        "handler": "confirm_shipment",
        "args_model": ConfirmShipmentArgs,
        "description": "Confirm shipment of an order with package details (Orders API v0).",
    },
    "get_order_regulated_info": {
        "component": "orders",
        "handler": "get_order_regulated_info",
        "args_model": GetOrderRegulatedInfoArgs,
        "description": "Get regulated information for an order requiring verification (Orders API v0).",
    },
    # ---- Migration ----
    "migration_assistant": {
        "component": "migration",
        "handler": "migration_assistant",
        "args_model": MigrationAssistantArgs,
        "description": (
            "Migrate Orders API client code from v0 to 2026-01-01. Without source_code "
            "returns a migration guide; with source_code returns an analysis report and, "
            "unless analysis_only is set, refactored code. No credentials required."
        ),
    },
}
