"""Render Orders API JSON payloads as readable text."""

from datetime import datetime
from typing import Any, Dict, List, Optional

RULE = "=" * 50
ITEM_RULE = "-" * 40


def format_timestamp(value: Optional[str], with_time: bool = True) -> str:
    """ISO 8601 -> ``YYYY-MM-DD HH:MM:SS UTC``; unparseable input is returned as-is."""
    if not value:
        return "N/A"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if not with_time:
        return parsed.strftime("%Y-%m-%d")
    suffix = " UTC" if parsed.utcoffset() is not None and not parsed.utcoffset() else ""
    return parsed.strftime("%Y-%m-%d %H:%M:%S") + suffix


def _money(price: Optional[Dict[str, Any]]) -> str:
    if not price:
        return "N/A"
    return f"{price.get('amount')} {price.get('currencyCode')}"


def _unit_price(item: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return ((item.get("product") or {}).get("price") or {}).get("unitPrice")


def format_orders_response(data: Dict[str, Any]) -> str:
    orders = (data or {}).get("orders") or []
    if not orders:
        return "No orders found matching the criteria."

    lines = [f"📦 Found {len(orders)} orders:", "", RULE, ""]
    for index, order in enumerate(orders, start=1):
        fulfillment = order.get("fulfillment") or {}
        channel = order.get("salesChannel") or {}
        lines.append(f"**Order {index}**")
        lines.append(f"Order ID: {order.get('orderId')}")
        lines.append(f"Created: {format_timestamp(order.get('createdTime'), with_time=False)}")
        lines.append(f"Status: {fulfillment.get('fulfillmentStatus') or 'Unknown'}")
        lines.append(f"Marketplace: {channel.get('marketplaceName') or 'N/A'}")

        if order.get("buyer"):
            lines.append(f"Buyer: {order['buyer'].get('buyerName') or 'N/A'}")

        address = (order.get("recipient") or {}).get("deliveryAddress")
        if address:
            lines.append(
                f"Shipping: {address.get('addressLine1', '')}, {address.get('city', '')}, "
                f"{address.get('stateOrRegion', '')} {address.get('postalCode', '')}"
            )

        items = order.get("orderItems") or []
        if items:
            lines.append(f"Items: {len(items)} item(s)")
            for item_index, item in enumerate(items, start=1):
                title = (item.get("product") or {}).get("title") or "Unknown"
                lines.append(
                    f"  {item_index}. {title} (Qty: {item.get('quantityOrdered')}, "
                    f"Price: {_money(_unit_price(item))})"
                )
        lines.extend(["", ITEM_RULE, ""])

    next_token = ((data or {}).get("pagination") or {}).get("nextToken")
    if next_token:
        lines.append(f"🔗 **Next page available** - Use paginationToken: {next_token}")
    return "\n".join(lines)


def _address_lines(address: Dict[str, Any]) -> List[str]:
    lines = ["", "**Shipping Address**", f"Name: {address.get('name') or 'N/A'}"]
    if address.get("companyName"):
        lines.append(f"Company: {address['companyName']}")
    lines.append(f"Address: {address.get('addressLine1', '')}")
    for key in ("addressLine2", "addressLine3"):
        if address.get(key):
            lines.append(f"         {address[key]}")
    lines.append(f"City: {address.get('city') or 'N/A'}")
    lines.append(f"State/Region: {address.get('stateOrRegion') or 'N/A'}")
    lines.append(f"Postal Code: {address.get('postalCode') or 'N/A'}")
    lines.append(f"Country: {address.get('countryCode') or 'N/A'}")
    if address.get("phone"):
        lines.append(f"Phone: {address['phone']}")
    lines.append(f"Address Type: {address.get('addressType') or 'N/A'}")
    return lines


def format_order_response(order: Optional[Dict[str, Any]]) -> str:
    if not order:
        return "Order not found."

    channel = order.get("salesChannel") or {}
    lines = [
        "📋 **Order Details**",
        "",
        RULE,
        "",
        "**Basic Information**",
        f"Order ID: {order.get('orderId')}",
        f"Created: {format_timestamp(order.get('createdTime'))}",
        f"Last Updated: {format_timestamp(order.get('lastUpdatedTime'))}",
        f"Marketplace: {channel.get('marketplaceName') or 'N/A'}",
        f"Channel: {channel.get('channelName') or 'N/A'}",
    ]
    if order.get("programs"):
        lines.append(f"Programs: {', '.join(order['programs'])}")

    buyer = order.get("buyer")
    if buyer:
        lines.extend([
            "",
            "**Buyer Information**",
            f"Name: {buyer.get('buyerName') or 'N/A'}",
            f"Email: {buyer.get('buyerEmail') or 'N/A'}",
        ])
        if buyer.get("buyerCompanyName"):
            lines.append(f"Company: {buyer['buyerCompanyName']}")
        if buyer.get("buyerPurchaseOrderNumber"):
            lines.append(f"PO Number: {buyer['buyerPurchaseOrderNumber']}")

    address = (order.get("recipient") or {}).get("deliveryAddress")
    if address:
        lines.extend(_address_lines(address))

    fulfillment = order.get("fulfillment")
    if fulfillment:
        lines.extend([
            "",
            "**Fulfillment Information**",
            f"Status: {fulfillment.get('fulfillmentStatus')}",
            f"Fulfilled By: {fulfillment.get('fulfilledBy')}",
        ])
        if fulfillment.get("fulfillmentServiceLevel"):
            lines.append(f"Service Level: {fulfillment['fulfillmentServiceLevel']}")

    items = order.get("orderItems") or []
    if items:
        lines.extend(["", f"**Order Items ({len(items)})**", ""])
        for index, item in enumerate(items, start=1):
            product = item.get("product") or {}
            lines.append(f"**{index}. {product.get('title') or 'Unknown Product'}**")
            lines.append(f"   Order Item ID: {item.get('orderItemId')}")
            lines.append(f"   ASIN: {product.get('asin') or 'N/A'}")
            lines.append(f"   SKU: {product.get('sellerSku') or 'N/A'}")
            lines.append(f"   Quantity Ordered: {item.get('quantityOrdered')}")
            price = _unit_price(item)
            if price:
                lines.append(f"   Unit Price: {_money(price)}")
            item_fulfillment = item.get("fulfillment")
            if item_fulfillment:
                lines.append(f"   Fulfilled: {item_fulfillment.get('quantityFulfilled') or 0}")
                lines.append(f"   Unfulfilled: {item_fulfillment.get('quantityUnfulfilled') or 0}")
            lines.append("")

    return "\n".join(lines)


def format_regulated_info_response(data: Optional[Dict[str, Any]]) -> str:
    if not data:
        return "No regulated information found for this order."

    lines = ["📋 **Regulated Order Information**", "", RULE, ""]
    info = data.get("regulatedInformation") or {}

    status = info.get("verificationStatus")
    if status:
        lines.append("**Verification Status**")
        lines.append(f"Status: {status.get('status')}")
        if status.get("validUntil"):
            lines.append(f"Valid Until: {format_timestamp(status['validUntil'])}")
        reason = status.get("rejectionReason")
        if reason:
            lines.append(f"Rejection Reason: {reason.get('rejectionReasonDescription')}")
        lines.append("")

    items = info.get("regulatedOrderItems") or []
    if items:
        lines.extend([f"**Regulated Items ({len(items)})**", ""])
        for index, item in enumerate(items, start=1):
            lines.append(f"**{index}. {item.get('title') or 'Unknown Item'}**")
            lines.append(f"   Order Item ID: {item.get('orderItemId')}")
            lines.append(f"   ASIN: {item.get('asin')}")
            lines.append(f"   Quantity Ordered: {item.get('quantityOrdered')}")
            if item.get("verificationStatus"):
                lines.append(f"   Verification Status: {item['verificationStatus'].get('status')}")
            instructions = item.get("fulfillmentInstructions")
            if instructions:
                lines.append("   Fulfillment Instructions:")
                if instructions.get("fulfillmentInstructionsType"):
                    lines.append(f"      Type: {instructions['fulfillmentInstructionsType']}")
                if instructions.get("fulfillmentInstructionsText"):
                    lines.append(f"      Text: {instructions['fulfillmentInstructionsText']}")
            lines.append("")

    errors = data.get("errors") or []
    if errors:
        lines.append("**Errors**")
        for error in errors:
            lines.append(f"- Code: {error.get('code')}, Message: {error.get('message')}")

    return "\n".join(lines)
