"""Order tools - Order lookup and delivery tracking."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.agents.tools.store import OrderRecord, SupportDataStore
from src.llm.base import ToolDefinition
from src.utils.logging import get_logger

logger = get_logger(__name__)


class FetchOrderDetailsArgs(BaseModel):
    """Arguments of fetchOrderDetails."""

    model_config = ConfigDict(populate_by_name=True)

    order_number: str | None = Field(
        default=None,
        alias="orderNumber",
        description="The order number (e.g., ORD-2024-001)",
    )
    customer_email: str | None = Field(
        default=None,
        alias="customerEmail",
        description="Customer email address",
    )


class CheckDeliveryStatusArgs(BaseModel):
    """Arguments of checkDeliveryStatus."""

    model_config = ConfigDict(populate_by_name=True)

    order_number: str = Field(
        ..., alias="orderNumber", description="The order number to check"
    )


def _order_summary(order: OrderRecord) -> dict[str, Any]:
    return {
        "orderNumber": order.order_number,
        "status": order.status,
        "totalAmount": order.total_amount,
        "items": order.items,
        "trackingNumber": order.tracking_number,
        "estimatedDelivery": order.estimated_delivery,
        "shippingAddress": order.shipping_address,
        "createdAt": order.created_at,
    }


def build_order_tools(store: SupportDataStore) -> list[ToolDefinition]:
    """Create the order agent's tools bound to a data store."""

    async def fetch_order_details(args: FetchOrderDetailsArgs) -> dict[str, Any]:
        if not args.order_number and not args.customer_email:
            return {
                "success": False,
                "error": "Either orderNumber or customerEmail must be provided",
            }

        try:
            orders = await store.find_orders(
                order_number=args.order_number,
                customer_email=args.customer_email,
                limit=5,
            )
        except Exception:
            logger.exception("Order lookup failed", order_number=args.order_number)
            return {"success": False, "error": "Failed to fetch order details"}

        if not orders:
            return {"success": False, "error": "No orders found"}

        return {"success": True, "orders": [_order_summary(o) for o in orders]}

    async def check_delivery_status(args: CheckDeliveryStatusArgs) -> dict[str, Any]:
        try:
            order = await store.get_order(args.order_number)
        except Exception:
            logger.exception("Delivery lookup failed", order_number=args.order_number)
            return {"success": False, "error": "Failed to check delivery status"}

        if order is None:
            return {"success": False, "error": "Order not found"}

        return {
            "success": True,
            "orderNumber": order.order_number,
            "delivery": {
                "status": order.status,
                "trackingNumber": order.tracking_number,
                "estimatedDelivery": order.estimated_delivery,
                "shippingAddress": order.shipping_address,
                "lastUpdated": order.updated_at,
            },
        }

    return [
        ToolDefinition(
            name="fetchOrderDetails",
            description="Fetch order details by order number or customer email",
            parameters=FetchOrderDetailsArgs,
            execute=fetch_order_details,
        ),
        ToolDefinition(
            name="checkDeliveryStatus",
            description="Check the delivery status and tracking information for an order",
            parameters=CheckDeliveryStatusArgs,
            execute=check_delivery_status,
        ),
    ]
