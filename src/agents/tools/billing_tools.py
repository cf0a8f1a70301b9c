"""Billing tools - Invoice and refund lookups."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.agents.tools.store import SupportDataStore
from src.llm.base import ToolDefinition
from src.utils.logging import get_logger

logger = get_logger(__name__)


class GetInvoiceDetailsArgs(BaseModel):
    """Arguments of getInvoiceDetails."""

    model_config = ConfigDict(populate_by_name=True)

    invoice_number: str | None = Field(
        default=None,
        alias="invoiceNumber",
        description="The invoice number (e.g., INV-2024-001)",
    )
    customer_email: str | None = Field(
        default=None,
        alias="customerEmail",
        description="Customer email address",
    )


class CheckRefundStatusArgs(BaseModel):
    """Arguments of checkRefundStatus."""

    model_config = ConfigDict(populate_by_name=True)

    refund_number: str | None = Field(
        default=None,
        alias="refundNumber",
        description="The refund number (e.g., REF-2024-001)",
    )
    customer_email: str | None = Field(
        default=None,
        alias="customerEmail",
        description="Customer email address",
    )


def build_billing_tools(store: SupportDataStore) -> list[ToolDefinition]:
    """Create the billing agent's tools bound to a data store."""

    async def get_invoice_details(args: GetInvoiceDetailsArgs) -> dict[str, Any]:
        try:
            invoices = await store.find_invoices(
                invoice_number=args.invoice_number,
                customer_email=args.customer_email,
                limit=5,
            )
        except Exception:
            logger.exception(
                "Invoice lookup failed", invoice_number=args.invoice_number
            )
            return {"success": False, "error": "Failed to fetch invoice details"}

        if not invoices:
            return {"success": False, "error": "No invoices found"}

        return {
            "success": True,
            "invoices": [
                {
                    "invoiceNumber": inv.invoice_number,
                    "amount": inv.amount,
                    "status": inv.status,
                    "paymentMethod": inv.payment_method,
                    "billingPeriod": inv.billing_period,
                    "dueDate": inv.due_date,
                    "paidAt": inv.paid_at,
                    "items": inv.items,
                }
                for inv in invoices
            ],
        }

    async def check_refund_status(args: CheckRefundStatusArgs) -> dict[str, Any]:
        try:
            refunds = await store.find_refunds(
                refund_number=args.refund_number,
                customer_email=args.customer_email,
                limit=5,
            )
        except Exception:
            logger.exception("Refund lookup failed", refund_number=args.refund_number)
            return {"success": False, "error": "Failed to check refund status"}

        if not refunds:
            return {"success": False, "error": "No refunds found"}

        return {
            "success": True,
            "refunds": [
                {
                    "refundNumber": ref.refund_number,
                    "amount": ref.amount,
                    "status": ref.status,
                    "reason": ref.reason,
                    "processedAt": ref.processed_at,
                    "createdAt": ref.created_at,
                }
                for ref in refunds
            ],
        }

    return [
        ToolDefinition(
            name="getInvoiceDetails",
            description="Get invoice details by invoice number or customer email",
            parameters=GetInvoiceDetailsArgs,
            execute=get_invoice_details,
        ),
        ToolDefinition(
            name="checkRefundStatus",
            description="Check the status of a refund request",
            parameters=CheckRefundStatusArgs,
            execute=check_refund_status,
        ),
    ]
