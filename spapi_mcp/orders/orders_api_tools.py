"""Order management tools.

``search_orders``, ``get_order`` and ``cancel_order`` call the 2026-01-01
Orders API. Shipment status, verification status, shipment confirmation
and regulated info have no dated counterpart and still call v0.

Every tool checks credentials before touching the network and reports
failures as ``isError`` results.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from spapi_mcp.context import ServerContext
from spapi_mcp.errors import CredentialsNotConfiguredError, MissingParameterError, SPAPIError
from spapi_mcp.orders.response_formatter import (
    format_order_response,
    format_orders_response,
    format_regulated_info_response,
)
from spapi_mcp.schemas import (
    CancelOrderArgs,
    ConfirmShipmentArgs,
    GetOrderArgs,
    GetOrderRegulatedInfoArgs,
    SearchOrdersArgs,
    UpdateShipmentStatusArgs,
    UpdateVerificationStatusArgs,
    error_response,
    text_response,
)

logger = logging.getLogger("spapi.orders")

ORDERS_PATH = "/orders/2026-01-01/orders"
LEGACY_ORDERS_PATH = "/orders/v0/orders"

CREDENTIALS_REQUIRED = """❌ **SP-API Credentials Required**

To use this tool, you need to configure SP-API credentials first.

**Option 1: Use the credentials tool**
```
Configure my SP-API credentials:
- Client ID: amzn1.application-oa2-client.xxx
- Client Secret: your_secret
- Refresh Token: Atzr|xxx
- Region: na
```

**Option 2: Set environment variables**
```bash
export SP_API_CLIENT_ID="your_client_id"
export SP_API_CLIENT_SECRET="your_client_secret"
export SP_API_REFRESH_TOKEN="your_refresh_token"
```

**Note:** The migration assistant tool does not require credentials."""


def _join(values: Optional[List[str]]) -> Optional[str]:
    return ",".join(values) if values else None


def _dump_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, default=str)


class OrdersApiTools:
    """Handlers for the order tools. All state lives on the shared context."""

    def __init__(self, context: ServerContext):
        self.context = context

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.context.base_url.rstrip('/')}{path}"

    @property
    def default_marketplace_id(self) -> str:
        return self.context.config["default_marketplace_id"]

    def _legacy_body(self, args) -> Dict[str, Any]:
        """Request body for a v0 write: the arguments minus the path id."""
        body = {"marketplaceId": args.marketplaceId or self.default_marketplace_id}
        body.update(args.model_dump(exclude_none=True, exclude={"orderId", "marketplaceId"}))
        return body

    def _call(
        self,
        operation: str,
        method: str,
        path: str,
        render: Callable[[Any], str],
        params: Optional[Dict[str, str]] = None,
        body: Any = None,
        error_prefix: str = "Error",
    ) -> Dict[str, Any]:
        try:
            client = self.context.get_client()
        except CredentialsNotConfiguredError:
            logger.info("%s refused: credentials not configured", operation)
            return error_response(CREDENTIALS_REQUIRED)

        try:
            payload = client.make_authenticated_request(method, self._url(path), params, body)
        except SPAPIError as exc:
            logger.error("%s failed: %s", operation, exc)
            return error_response(f"{error_prefix}: {exc}")
        return text_response(render(payload))

    # ------------------------------------------------------------------
    # 2026-01-01 API
    # ------------------------------------------------------------------

    def build_search_params(self, args: SearchOrdersArgs) -> Dict[str, str]:
        """Query string for search_orders.

        Raises:
            MissingParameterError: Neither createdAfter nor lastUpdatedAfter is set.
        """
        if not args.createdAfter and not args.lastUpdatedAfter:
            raise MissingParameterError(("createdAfter", "lastUpdatedAfter"))

        params = {
            "marketplaceIds": _join(args.marketplaceIds or [self.default_marketplace_id]),
            "maxResultsPerPage": str(args.maxResultsPerPage),
            "createdAfter": args.createdAfter,
            "createdBefore": args.createdBefore,
            "lastUpdatedAfter": args.lastUpdatedAfter,
            "lastUpdatedBefore": args.lastUpdatedBefore,
            "fulfillmentStatuses": _join(args.fulfillmentStatuses),
            "fulfilledBy": _join(args.fulfilledBy),
            "includedData": _join(args.includedData),
            "paginationToken": args.paginationToken,
        }
        return {key: value for key, value in params.items() if value}

    def search_orders(self, args: SearchOrdersArgs) -> Dict[str, Any]:
        if not self.context.credentials.is_configured():
            return error_response(CREDENTIALS_REQUIRED)
        try:
            params = self.build_search_params(args)
        except MissingParameterError as exc:
            return error_response(f"Error: {exc}")
        return self._call("search_orders", "GET", ORDERS_PATH, format_orders_response, params=params)

    def get_order(self, args: GetOrderArgs) -> Dict[str, Any]:
        params = {"includedData": _join(args.includedData)} if args.includedData else {}
        return self._call(
            "get_order",
            "GET",
            f"{ORDERS_PATH}/{args.orderId}",
            lambda payload: format_order_response((payload or {}).get("order")),
            params=params,
        )

    def cancel_order(self, args: CancelOrderArgs) -> Dict[str, Any]:
        return self._call(
            "cancel_order",
            "PUT",
            f"{ORDERS_PATH}/{args.orderId}/cancellation",
            lambda _payload: (
                f"✅ Order cancellation request accepted for order {args.orderId}. "
                "The cancellation process is underway."
            ),
            body={"cancelReasonCode": args.cancelReasonCode},
        )

    # ------------------------------------------------------------------
    # v0 API (no 2026-01-01 counterpart)
    # ------------------------------------------------------------------

    def update_shipment_status(self, args: UpdateShipmentStatusArgs) -> Dict[str, Any]:
        body = self._legacy_body(args)
        if not body.get("orderItems"):
            body.pop("orderItems", None)
        return self._call(
            "update_shipment_status",
            "POST",
            f"{LEGACY_ORDERS_PATH}/{args.orderId}/shipment",
            lambda payload: (
                f"✅ Shipment status updated successfully for order {args.orderId}.\n\n"
                f"Response: {_dump_json(payload)}"
            ),
            body=body,
            error_prefix="Error updating shipment status",
        )

    def update_verification_status(self, args: UpdateVerificationStatusArgs) -> Dict[str, Any]:
        return self._call(
            "update_verification_status",
            "PATCH",
            f"{LEGACY_ORDERS_PATH}/{args.orderId}/regulatedInfo",
            lambda payload: (
                f"✅ Verification status updated successfully for order {args.orderId}.\n\n"
                f"Response: {_dump_json(payload)}"
            ),
            body=self._legacy_body(args),
            error_prefix="Error updating verification status",
        )

    def confirm_shipment(self, args: ConfirmShipmentArgs) -> Dict[str, Any]:
        return self._call(
            "confirm_shipment",
            "POST",
            f"{LEGACY_ORDERS_PATH}/{args.orderId}/shipmentConfirmation",
            lambda payload: (
                f"✅ Shipment confirmed successfully for order {args.orderId}.\n\n"
                f"Response: {_dump_json(payload)}"
            ),
            body=self._legacy_body(args),
            error_prefix="Error confirming shipment",
        )

    def get_order_regulated_info(self, args: GetOrderRegulatedInfoArgs) -> Dict[str, Any]:
        return self._call(
            "get_order_regulated_info",
            "GET",
            f"{LEGACY_ORDERS_PATH}/{args.orderId}/regulatedInfo",
            format_regulated_info_response,
            error_prefix="Error getting regulated info",
        )
