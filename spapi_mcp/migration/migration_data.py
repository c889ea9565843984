"""Orders API v0 -> 2026-01-01 migration knowledge base.

Static, read-only tables describing one migration path: attributes removed
with no replacement, attributes not yet supported by the target, attribute
renames/restructures, capabilities new in the target, and per-method
availability. Built once per process and shared.
"""

import functools
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

SOURCE_VERSION = "orders-v0"
TARGET_VERSION = "orders-2026-01-01"

LEGACY_PATH_PREFIX = "/orders/v0/"
TARGET_PATH_PREFIX = "/orders/2026-01-01/"

# Replacement descriptor carried by methods that must stay on the legacy path.
NO_COUNTERPART = "No 2026-01-01 counterpart"


class Availability(str, Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"


@dataclass(frozen=True)
class MethodMapping:
    target: str
    availability: Availability
    notes: str

    @property
    def is_available(self) -> bool:
        return self.availability == Availability.AVAILABLE

    @property
    def status_label(self) -> str:
        return "✅ Available" if self.is_available else "❌ Not Available"


@dataclass(frozen=True)
class MigrationData:
    """Knowledge base for one source -> target migration path."""

    source_version: str
    target_version: str
    deprecated_attributes: Tuple[str, ...]
    unsupported_attributes: Tuple[str, ...]
    attribute_mapping: Mapping[str, str]
    new_capabilities: Tuple[str, ...]
    method_mapping: Mapping[str, MethodMapping]

    def available_methods(self):
        return [(name, m) for name, m in self.method_mapping.items() if m.is_available]

    def unavailable_methods(self):
        return [(name, m) for name, m in self.method_mapping.items() if not m.is_available]


_DEPRECATED_ATTRIBUTES = (
    "OrderChannel",
    "ShipServiceLevel",
    "CbaDisplayableShippingLabel",
    "IsGlobalExpressEnabled",
    "PromiseResponseDueDate",
    "IsEstimatedShipDateSet",
    "IsSoldByAB",
    "BuyerInfo.BuyerCounty",
)

_UNSUPPORTED_ATTRIBUTES = (
    "NumberOfItemsShipped",
    "NumberOfItemsUnshipped",
    "PaymentExecutionDetail",
    "PaymentMethod",
    "PaymentMethodDetails",
    "IsIBA",
    "HasRegulatedItems",
    "DefaultShipFromLocationAddress",
    "ElectronicInvoiceStatus",
    "BuyerInvoicePreference",
    "BuyerTaxInformation",
    "FulfillmentInstruction",
    "MarketplaceTaxInfo",
    "SellerDisplayName",
    "AutomatedShippingSettings",
    "BuyerInfo.BuyerTaxInfo",
    "ProductInfo",
    "ProductInfo.NumberOfItems",
    "TaxCollection",
    "TaxCollection.Model",
    "TaxCollection.ResponsibleParty",
    "DeemedResellerCategory",
    "StoreChainStoreId",
    "SerialNumberRequired",
    "AssociatedItems",
    "AssociatedItem.OrderId",
    "AssociatedItem.OrderItemId",
    "AssociatedItem.AssociationType",
    "PointsGrantedDetail.PointsNumber",
    "PointsGrantedDetail.PointsMonetaryValue",
    "ConditionId",
    "ConditionSubtypeId",
)

_ATTRIBUTE_MAPPING = {
    # Order level
    "AmazonOrderId": "Order.orderId",
    "SellerOrderId": "Order.orderAliases (with aliasType == SELLER_ORDER_ID)",
    "MarketplaceId": "Order.salesChannel.marketplaceId",
    "PurchaseDate": "Order.createdTime",
    "LastUpdateDate": "Order.lastUpdatedTime",
    "OrderType": "Order.programs (check for PREORDER)",
    "OrderStatus": "Order.fulfillment.fulfillmentStatus",
    "FulfillmentChannel": "Order.fulfillment.fulfilledBy",
    "SalesChannel": "Order.salesChannel.marketplaceName",
    "ShipmentServiceLevelCategory": "Order.fulfillment.fulfillmentServiceLevel",
    "OrderTotal": "Order.proceeds.grandTotal",
    "EasyShipShipmentStatus": "Order.packages.packageStatus.detailedStatus",
    "EarliestShipDate": "Order.fulfillment.shipByWindow.earliestDateTime",
    "LatestShipDate": "Order.fulfillment.shipByWindow.latestDateTime",
    "EarliestDeliveryDate": "Order.fulfillment.deliverByWindow.earliestDateTime",
    "LatestDeliveryDate": "Order.fulfillment.deliverByWindow.latestDateTime",
    "IsBusinessOrder": "Order.programs (check for AMAZON_BUSINESS)",
    "IsPrime": "Order.programs (check for PRIME)",
    "IsPremiumOrder": "Order.programs (check for PREMIUM)",
    "ReplacedOrderId": (
        "Order.associatedOrders (with associationType == REPLACEMENT_ORIGINAL_ID or EXCHANGE_ORIGINAL_ID)"
    ),
    "IsISPU": "Order.programs (check for IN_STORE_PICK_UP)",
    "IsAccessPointOrder": "Order.recipient.deliveryAddress.addressType (check for PICKUP_POINT)",
    "ShippingAddress": "Order.recipient.deliveryAddress",
    "BuyerInfo.BuyerEmail": "Order.buyer.buyerEmail",
    "BuyerInfo.BuyerName": "Order.buyer.buyerName",
    "BuyerInfo.PurchaseOrderNumber": "Order.buyer.buyerPurchaseOrderNumber",
    "BuyerCompanyName": "Order.buyer.buyerCompanyName",
    "DeliveryPreferences": "Order.recipient.deliveryPreference",
    # Order item level
    "ASIN": "Order.orderItems.product.asin",
    "SellerSKU": "Order.orderItems.product.sellerSku",
    "OrderItemId": "Order.orderItems.orderItemId",
    "Title": "Order.orderItems.product.title",
    "QuantityOrdered": "Order.orderItems.quantityOrdered",
    "QuantityShipped": "Order.orderItems.fulfillment.quantityFulfilled",
    "PointsGranted": "Order.orderItems.expense.pointsCost.pointsGranted",
    "ItemPrice": "Order.orderItems.proceeds.breakdowns.subtotal (with type == ITEM)",
    "ShippingPrice": "Order.orderItems.proceeds.breakdowns.subtotal (with type == SHIPPING)",
    "ItemTax": "Order.orderItems.proceeds.breakdowns.detailedBreakdowns.value (type == TAX && subtype == ITEM)",
    "ShippingTax": (
        "Order.orderItems.proceeds.breakdowns.detailedBreakdowns.value (type == TAX && subtype == SHIPPING)"
    ),
    "ShippingDiscount": (
        "Order.orderItems.proceeds.breakdowns.detailedBreakdowns.value (type == DISCOUNT && subtype == SHIPPING)"
    ),
    "PromotionDiscount": "Order.orderItems.proceeds.breakdowns.subtotal (with type == DISCOUNT)",
    "PromotionDiscountTax": (
        "Order.orderItems.proceeds.breakdowns.detailedBreakdowns.value (type == TAX && subtype == DISCOUNT)"
    ),
    "CODFee": "Order.orderItems.proceeds.breakdowns.subtotal (with type == COD_FEE)",
    "CODFeeDiscount": (
        "Order.orderItems.proceeds.breakdowns.detailedBreakdowns.value (type == DISCOUNT && subtype == COD_FEE)"
    ),
    "ItemBuyerInfo.GiftWrapPrice": "Order.orderItems.proceeds.breakdowns.subtotal (with type == GIFT_WRAP)",
    "ItemBuyerInfo.GiftWrapTax": (
        "Order.orderItems.proceeds.breakdowns.detailedBreakdowns.value (type == TAX && subtype == GIFT_WRAP)"
    ),
    "PromotionIds": "Order.orderItems.promotion.breakdowns.promotionId",
    "IsGift": "Order.orderItems.fulfillment.packing.giftOption",
    "ConditionNote": "Order.orderItems.product.condition",
    "ScheduledDeliveryStartDate": "Order.orderItems.fulfillment.shipping.scheduledDeliveryWindow",
    "ScheduledDeliveryEndDate": "Order.orderItems.fulfillment.shipping.scheduledDeliveryWindow",
    "PriceDesignation": "Order.orderItems.product.price.priceDesignation",
    "IossNumber": "Order.orderItems.fulfillment.shipping.internationalShipping.iossNumber",
    "IsTransparency": "Order.orderItems.programs (check for TRANSPARENCY)",
    "ItemBuyerInfo.BuyerCustomizedInfo": "Order.orderItems.product.customization",
    "ItemBuyerInfo.BuyerCustomizedInfo.CustomizedURL": "Order.orderItems.product.customization.customizedUrl",
    "ItemBuyerInfo.GiftMessageText": "Order.orderItems.fulfillment.packing.giftOption.giftMessage",
    "ItemBuyerInfo.GiftWrapLevel": "Order.orderItems.fulfillment.packing.giftOption.giftWrapLevel",
    "BuyerRequestedCancel.IsBuyerRequestedCancel": "Order.orderItems.cancellation.requester (check for BUYER)",
    "BuyerRequestedCancel.BuyerCancelReason": "Order.orderItems.cancellation.cancelReason",
    "SerialNumbers": "Order.orderItems.product.serialNumbers",
    "SubstitutionPreferences": "Order.orderItems.fulfillment.picking.substitutionPreference",
    "Measurement": "Order.orderItems.measurement",
    "ShippingConstraints": "Order.orderItems.fulfillment.shipping.shippingConstraints",
    "AmazonPrograms": (
        "Order.orderItems.programs or Order.programs (check for SUBSCRIBE_AND_SAVE, FBM_SHIP_PLUS)"
    ),
}

_NEW_CAPABILITIES = (
    "Order.programs with AMAZON_BAZAAR",
    "Order.programs with AMAZON_HAUL",
    "Order.programs with AMAZON_EASY_SHIP (non-Brazil) or DELIVERY_BY_AMAZON (Brazil only)",
    "Order.orderItems.product.price.unitPrice",
    "Order.orderItems.proceeds.proceedsTotal",
    "Order.orderItems.fulfillment.shipping.shippingConstraints.cashOnDelivery",
    "Order.packages for FBM orders (carrier, shippingService, trackingNumber, package status)",
)

_AVAILABLE = Availability.AVAILABLE
_UNAVAILABLE = Availability.UNAVAILABLE

_METHOD_MAPPING = {
    "getOrders": MethodMapping(
        "search_orders (with filters)",
        _AVAILABLE,
        "Use with filters like createdAfter, marketplaceIds, etc.",
    ),
    "getOrder": MethodMapping(
        "get_order (with includedData parameter)",
        _AVAILABLE,
        "Order items included by default, use includedData for additional data",
    ),
    "getOrderBuyerInfo": MethodMapping(
        NO_COUNTERPART,
        _UNAVAILABLE,
        "Continue using V0 API: GET /orders/v0/orders/{orderId}/buyerInfo",
    ),
    "getOrderAddress": MethodMapping(
        "get_order (with includedData=['RECIPIENT'])",
        _AVAILABLE,
        "Include RECIPIENT in includedData parameter",
    ),
    "getOrderItems": MethodMapping(
        "get_order (order items included by default)",
        _AVAILABLE,
        "Order items are always included, no need for separate call",
    ),
    "getOrderItemsBuyerInfo": MethodMapping(
        "get_order (with includedData=['BUYER'])",
        _AVAILABLE,
        "Item buyer info included when BUYER is in includedData",
    ),
    "getOrderRegulatedInfo": MethodMapping(
        NO_COUNTERPART,
        _UNAVAILABLE,
        "Continue using V0 API: GET /orders/v0/orders/{orderId}/regulatedInfo",
    ),
    "updateShipmentStatus": MethodMapping(
        NO_COUNTERPART,
        _UNAVAILABLE,
        "Continue using V0 API: POST /orders/v0/orders/{orderId}/shipment",
    ),
    "updateVerificationStatus": MethodMapping(
        NO_COUNTERPART,
        _UNAVAILABLE,
        "Continue using V0 API: PATCH /orders/v0/orders/{orderId}/regulatedInfo",
    ),
    "confirmShipment": MethodMapping(
        NO_COUNTERPART,
        _UNAVAILABLE,
        "Continue using V0 API: POST /orders/v0/orders/{orderId}/shipmentConfirmation",
    ),
    "cancelOrder": MethodMapping(
        "cancel_order",
        _AVAILABLE,
        "Available in 2026-01-01 as PUT /orders/2026-01-01/orders/{orderId}/cancellation",
    ),
}


@functools.lru_cache(maxsize=None)
def get_orders_api_migration_data() -> MigrationData:
    """Return the shared, read-only Orders API v0 -> 2026-01-01 knowledge base."""
    return MigrationData(
        source_version=SOURCE_VERSION,
        target_version=TARGET_VERSION,
        deprecated_attributes=_DEPRECATED_ATTRIBUTES,
        unsupported_attributes=_UNSUPPORTED_ATTRIBUTES,
        attribute_mapping=MappingProxyType(dict(_ATTRIBUTE_MAPPING)),
        new_capabilities=_NEW_CAPABILITIES,
        method_mapping=MappingProxyType(dict(_METHOD_MAPPING)),
    )
