"""Support data store - Read interface used by the domain tools.

Persistent storage of orders, invoices, refunds and conversation messages is
owned by surrounding code. The tools only see this narrow async interface.
"""

import asyncio
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class OrderRecord(BaseModel):
    """주문 레코드."""

    order_number: str = Field(..., description="주문 번호 (ORD-YYYY-NNN)")
    customer_email: str = Field(..., description="고객 이메일")
    customer_name: str = Field(..., description="고객 이름")
    status: str = Field(..., description="pending/processing/shipped/delivered/cancelled")
    total_amount: str = Field(..., description="총 금액")
    items: list[dict[str, Any]] = Field(default_factory=list, description="주문 항목")
    shipping_address: str = Field(..., description="배송지")
    tracking_number: str | None = Field(default=None, description="운송장 번호")
    estimated_delivery: datetime | None = Field(default=None, description="예상 배송일")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class InvoiceRecord(BaseModel):
    """인보이스 레코드."""

    invoice_number: str = Field(..., description="인보이스 번호 (INV-YYYY-NNN)")
    customer_email: str = Field(..., description="고객 이메일")
    customer_name: str = Field(..., description="고객 이름")
    amount: str = Field(..., description="금액")
    status: str = Field(..., description="paid/pending/overdue/cancelled")
    payment_method: str | None = Field(default=None, description="결제 수단")
    billing_period: str | None = Field(default=None, description="청구 기간")
    due_date: datetime | None = Field(default=None, description="납부 기한")
    paid_at: datetime | None = Field(default=None, description="결제 시간")
    items: list[dict[str, Any]] = Field(default_factory=list, description="청구 항목")


class RefundRecord(BaseModel):
    """환불 레코드."""

    refund_number: str = Field(..., description="환불 번호 (REF-YYYY-NNN)")
    customer_email: str = Field(..., description="고객 이메일")
    amount: str = Field(..., description="환불 금액")
    status: str = Field(..., description="pending/approved/processed/rejected")
    reason: str | None = Field(default=None, description="환불 사유")
    invoice_number: str | None = Field(default=None, description="관련 인보이스 번호")
    processed_at: datetime | None = Field(default=None, description="처리 시간")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class StoredMessage(BaseModel):
    """저장된 대화 메시지."""

    conversation_id: str = Field(..., description="대화 ID")
    role: str = Field(..., description="user/assistant")
    content: str = Field(..., description="메시지 내용")
    agent_type: str | None = Field(default=None, description="응답한 Agent 유형")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class SupportDataStore(ABC):
    """Abstract read interface over the support database."""

    @abstractmethod
    async def find_orders(
        self,
        order_number: str | None = None,
        customer_email: str | None = None,
        limit: int = 5,
    ) -> list[OrderRecord]:
        """Find orders matching the order number or the customer email."""
        pass

    @abstractmethod
    async def get_order(self, order_number: str) -> OrderRecord | None:
        """Get a single order by number."""
        pass

    @abstractmethod
    async def find_invoices(
        self,
        invoice_number: str | None = None,
        customer_email: str | None = None,
        limit: int = 5,
    ) -> list[InvoiceRecord]:
        """Find invoices by number, or by customer email when no number is given."""
        pass

    @abstractmethod
    async def find_refunds(
        self,
        refund_number: str | None = None,
        customer_email: str | None = None,
        limit: int = 5,
    ) -> list[RefundRecord]:
        """Find refunds by number, or by customer email when no number is given."""
        pass

    @abstractmethod
    async def get_messages(
        self, conversation_id: str, limit: int = 10
    ) -> list[StoredMessage]:
        """Get the oldest ``limit`` messages of a conversation in creation order."""
        pass


class InMemorySupportStore(SupportDataStore):
    """In-memory implementation of SupportDataStore.

    Suitable for development and tests.
    """

    def __init__(
        self,
        orders: list[OrderRecord] | None = None,
        invoices: list[InvoiceRecord] | None = None,
        refunds: list[RefundRecord] | None = None,
    ) -> None:
        self._orders = list(orders or [])
        self._invoices = list(invoices or [])
        self._refunds = list(refunds or [])
        self._messages: dict[str, list[StoredMessage]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def add_message(self, message: StoredMessage) -> None:
        """Append a message to its conversation."""
        async with self._lock:
            self._messages[message.conversation_id].append(message)

    async def find_orders(
        self,
        order_number: str | None = None,
        customer_email: str | None = None,
        limit: int = 5,
    ) -> list[OrderRecord]:
        matches = [
            order
            for order in self._orders
            if (order_number and order.order_number == order_number)
            or (customer_email and order.customer_email == customer_email)
        ]
        return matches[:limit]

    async def get_order(self, order_number: str) -> OrderRecord | None:
        for order in self._orders:
            if order.order_number == order_number:
                return order
        return None

    async def find_invoices(
        self,
        invoice_number: str | None = None,
        customer_email: str | None = None,
        limit: int = 5,
    ) -> list[InvoiceRecord]:
        if invoice_number:
            matches = [i for i in self._invoices if i.invoice_number == invoice_number]
        else:
            matches = [i for i in self._invoices if i.customer_email == customer_email]
        return matches[:limit]

    async def find_refunds(
        self,
        refund_number: str | None = None,
        customer_email: str | None = None,
        limit: int = 5,
    ) -> list[RefundRecord]:
        if refund_number:
            matches = [r for r in self._refunds if r.refund_number == refund_number]
        else:
            matches = [r for r in self._refunds if r.customer_email == customer_email]
        return matches[:limit]

    async def get_messages(
        self, conversation_id: str, limit: int = 10
    ) -> list[StoredMessage]:
        async with self._lock:
            history = sorted(
                self._messages.get(conversation_id, []), key=lambda m: m.created_at
            )
        return history[:limit]

    @classmethod
    def with_seed_data(cls) -> "InMemorySupportStore":
        """Create a store pre-populated with sample records."""
        orders = [
            OrderRecord(
                order_number="ORD-2024-001",
                customer_email="john.doe@example.com",
                customer_name="John Doe",
                status="delivered",
                total_amount="149.99",
                items=[{"name": "Wireless Headphones", "quantity": 1, "price": 149.99}],
                shipping_address="123 Main St, New York, NY 10001",
                tracking_number="TRK1234567890",
                estimated_delivery=datetime(2024, 1, 20, tzinfo=UTC),
            ),
            OrderRecord(
                order_number="ORD-2024-002",
                customer_email="jane.smith@example.com",
                customer_name="Jane Smith",
                status="shipped",
                total_amount="299.99",
                items=[{"name": "Smart Watch", "quantity": 1, "price": 299.99}],
                shipping_address="456 Oak Ave, Los Angeles, CA 90001",
                tracking_number="TRK0987654321",
                estimated_delivery=datetime(2024, 1, 25, tzinfo=UTC),
            ),
            OrderRecord(
                order_number="ORD-2024-003",
                customer_email="bob.wilson@example.com",
                customer_name="Bob Wilson",
                status="processing",
                total_amount="599.99",
                items=[{"name": "Laptop Stand", "quantity": 2, "price": 299.995}],
                shipping_address="789 Pine Rd, Chicago, IL 60601",
                estimated_delivery=datetime(2024, 2, 1, tzinfo=UTC),
            ),
        ]
        invoices = [
            InvoiceRecord(
                invoice_number="INV-2024-001",
                customer_email="john.doe@example.com",
                customer_name="John Doe",
                amount="149.99",
                status="paid",
                payment_method="credit_card",
                billing_period="January 2024",
                paid_at=datetime(2024, 1, 15, tzinfo=UTC),
                items=[{"description": "Wireless Headphones", "amount": 149.99}],
            ),
            InvoiceRecord(
                invoice_number="INV-2024-002",
                customer_email="jane.smith@example.com",
                customer_name="Jane Smith",
                amount="29.99",
                status="overdue",
                payment_method="paypal",
                billing_period="February 2024",
                due_date=datetime(2024, 2, 28, tzinfo=UTC),
                items=[{"description": "Premium Subscription", "amount": 29.99}],
            ),
        ]
        refunds = [
            RefundRecord(
                refund_number="REF-2024-001",
                customer_email="john.doe@example.com",
                amount="149.99",
                status="processed",
                reason="Product defective",
                invoice_number="INV-2024-001",
                processed_at=datetime(2024, 1, 22, tzinfo=UTC),
            ),
        ]
        return cls(orders=orders, invoices=invoices, refunds=refunds)
