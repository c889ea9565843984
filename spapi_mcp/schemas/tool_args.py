"""Pydantic argument models for every MCP tool.

The ``tools/list`` input schemas are generated from these models
with ``model_json_schema()``.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FulfillmentStatus(str, Enum):
    PENDING = "PENDING"
    UNSHIPPED = "UNSHIPPED"
    PARTIALLY_SHIPPED = "PARTIALLY_SHIPPED"
    SHIPPED = "SHIPPED"
    CANCELLED = "CANCELLED"
    UNFULFILLABLE = "UNFULFILLABLE"


class FulfilledBy(str, Enum):
    AMAZON = "AMAZON"
    MERCHANT = "MERCHANT"


class IncludedData(str, Enum):
    BUYER = "BUYER"
    RECIPIENT = "RECIPIENT"
    PROCEEDS = "PROCEEDS"
    EXPENSE = "EXPENSE"
    PROMOTION = "PROMOTION"
    CANCELLATION = "CANCELLATION"
    FULFILLMENT = "FULFILLMENT"
    PACKAGES = "PACKAGES"


class CancelReasonCode(str, Enum):
    NO_INVENTORY = "NO_INVENTORY"
    BUYER_CANCELLED = "BUYER_CANCELLED"
    SHIPPING_ADDRESS_UNDELIVERABLE = "SHIPPING_ADDRESS_UNDELIVERABLE"
    CUSTOMER_EXCHANGE = "CUSTOMER_EXCHANGE"
    PRICING_ERROR = "PRICING_ERROR"


class ShipmentStatus(str, Enum):
    READY_FOR_PICKUP = "ReadyForPickup"
    PICKED_UP = "PickedUp"
    REFUSED_PICKUP = "RefusedPickup"


class VerificationStatus(str, Enum):
    APPROVED = "Approved"
    REJECTED = "Rejected"
    EXPIRED = "Expired"
    CANCELLED = "Cancelled"


class CodCollectionMethod(str, Enum):
    DIRECT_PAYMENT = "DirectPayment"


class CredentialAction(str, Enum):
    CONFIGURE = "configure"
    STATUS = "status"
    CLEAR = "clear"


class ToolArgs(BaseModel):
    model_config = ConfigDict(extra="ignore", use_enum_values=True)


# ---- Orders API 2026-01-01 ----

class SearchOrdersArgs(ToolArgs):
    createdAfter: Optional[str] = Field(
        None, description="ISO 8601 date for orders created after this time (e.g., '2025-10-01T00:00:00Z')"
    )
    createdBefore: Optional[str] = Field(None, description="ISO 8601 date for orders created before this time")
    lastUpdatedAfter: Optional[str] = Field(None, description="ISO 8601 date for orders last updated after this time")
    lastUpdatedBefore: Optional[str] = Field(None, description="ISO 8601 date for orders last updated before this time")
    fulfillmentStatuses: Optional[List[FulfillmentStatus]] = Field(None, description="Filter by fulfillment status")
    marketplaceIds: Optional[List[str]] = Field(
        None,
        description="Marketplace IDs to search in (e.g., ['ATVPDKIKX0DER'] for US). "
        "Defaults to the configured marketplace",
    )
    fulfilledBy: Optional[List[FulfilledBy]] = Field(None, description="Filter by fulfillment channel")
    maxResultsPerPage: int = Field(50, ge=1, le=100, description="Number of results per page (1-100)")
    includedData: Optional[List[IncludedData]] = Field(None, description="Data sets to include in response")
    paginationToken: Optional[str] = Field(None, description="Token for pagination from previous response")


class GetOrderArgs(ToolArgs):
    orderId: str = Field(..., description="Amazon order ID (e.g., '123-4567890-1234567')")
    includedData: Optional[List[IncludedData]] = Field(None, description="Data sets to include in response")


class CancelOrderArgs(ToolArgs):
    orderId: str = Field(..., description="Amazon order ID to cancel")
    cancelReasonCode: CancelReasonCode = Field(..., description="Reason for cancellation")


# ---- Orders API v0 ----

class OrderItemUpdate(ToolArgs):
    orderItemId: Optional[str] = Field(None, description="Order item ID")
    quantity: Optional[int] = Field(None, description="Quantity")


class UpdateShipmentStatusArgs(ToolArgs):
    orderId: str = Field(..., description="Amazon order ID")
    marketplaceId: Optional[str] = Field(
        None, description="Marketplace ID (e.g., 'ATVPDKIKX0DER' for US). Defaults to the configured marketplace"
    )
    shipmentStatus: ShipmentStatus = Field(..., description="New shipment status")
    orderItems: Optional[List[OrderItemUpdate]] = Field(None, description="Optional order items to update")


class RejectionReason(ToolArgs):
    rejectionReasonId: str = Field(..., description="Rejection reason ID")
    rejectionReasonDescription: str = Field(..., description="Rejection reason description")


class RegulatedOrderVerificationStatus(ToolArgs):
    status: VerificationStatus = Field(..., description="Verification status")
    validUntil: Optional[str] = Field(None, description="ISO 8601 date when status is valid until")
    rejectionReason: Optional[RejectionReason] = Field(
        None, description="Rejection reason (required if status is 'Rejected')"
    )


class UpdateVerificationStatusArgs(ToolArgs):
    orderId: str = Field(..., description="Amazon order ID")
    marketplaceId: Optional[str] = Field(
        None, description="Marketplace ID (e.g., 'ATVPDKIKX0DER' for US). Defaults to the configured marketplace"
    )
    regulatedOrderVerificationStatus: RegulatedOrderVerificationStatus


class ShipFromAddress(ToolArgs):
    name: str = Field(..., description="Sender name")
    addressLine1: str = Field(..., description="Address line 1")
    addressLine2: Optional[str] = Field(None, description="Address line 2")
    addressLine3: Optional[str] = Field(None, description="Address line 3")
    city: str = Field(..., description="City")
    county: Optional[str] = Field(None, description="County")
    district: Optional[str] = Field(None, description="District")
    stateOrRegion: str = Field(..., description="State or region")
    postalCode: str = Field(..., description="Postal code")
    countryCode: str = Field(..., description="Country code (e.g., 'US')")
    phone: str = Field(..., description="Phone number")


class PackageDetail(ToolArgs):
    packageReferenceId: str = Field(..., description="Package reference ID")
    carrierCode: str = Field(..., description="Carrier code (e.g., 'UPS', 'FEDEX', 'USPS')")
    shippingMethod: Optional[str] = Field(None, description="Shipping method")
    trackingNumber: Optional[str] = Field(None, description="Tracking number")
    shipDate: str = Field(..., description="ISO 8601 ship date (e.g., '2025-10-01T00:00:00Z')")
    carrierName: Optional[str] = Field(None, description="Carrier name")
    shipFrom: Optional[ShipFromAddress] = Field(None, description="Ship from address")


class ConfirmShipmentArgs(ToolArgs):
    orderId: str = Field(..., description="Amazon order ID")
    marketplaceId: Optional[str] = Field(
        None, description="Marketplace ID (e.g., 'ATVPDKIKX0DER' for US). Defaults to the configured marketplace"
    )
    packageDetail: PackageDetail
    codCollectionMethod: Optional[CodCollectionMethod] = Field(None, description="Cash on delivery collection method")


class GetOrderRegulatedInfoArgs(ToolArgs):
    orderId: str = Field(..., description="Amazon order ID")


# ---- Credentials ----

class CredentialToolArgs(ToolArgs):
    action: CredentialAction = Field(
        ...,
        description="Action to perform: 'configure' to set credentials, 'status' to check current config, "
        "'clear' to remove all credentials",
    )
    clientId: Optional[str] = Field(
        None, description="SP-API LWA Client ID (e.g., amzn1.application-oa2-client.xxx) - only used with 'configure'"
    )
    clientSecret: Optional[str] = Field(None, description="SP-API LWA Client Secret - only used with 'configure'")
    refreshToken: Optional[str] = Field(
        None, description="SP-API Refresh Token (e.g., Atzr|xxx) - only used with 'configure'"
    )
    baseUrl: Optional[str] = Field(
        None,
        description="API endpoint region: 'na' (North America), 'eu' (Europe), 'fe' (Far East), or full URL "
        "- only used with 'configure'",
    )


# ---- Migration assistant ----

class MigrationAssistantArgs(ToolArgs):
    source_code: Optional[str] = Field(
        None,
        description="Your existing API integration code (optional - if not provided, returns general migration guidance)",
    )
    source_version: str = Field(..., description="Current API version (e.g., 'orders-v0')")
    target_version: str = Field(..., description="Target API version (e.g., 'orders-2026-01-01')")
    language: Optional[str] = Field(None, description="Programming language of the source code")
    analysis_only: bool = Field(False, description="Only analyze without generating code (default: false)")
