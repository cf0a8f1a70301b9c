"""Domain tools used by the specialized agents.

Each builder binds its tools to a SupportDataStore. Tools never raise for
domain failures; they return ``{"success": False, "error": ...}``.
"""

from src.agents.tools.billing_tools import (
    CheckRefundStatusArgs,
    GetInvoiceDetailsArgs,
    build_billing_tools,
)
from src.agents.tools.conversation_tools import (
    QueryConversationHistoryArgs,
    build_conversation_tools,
)
from src.agents.tools.order_tools import (
    CheckDeliveryStatusArgs,
    FetchOrderDetailsArgs,
    build_order_tools,
)
from src.agents.tools.store import (
    InMemorySupportStore,
    InvoiceRecord,
    OrderRecord,
    RefundRecord,
    StoredMessage,
    SupportDataStore,
)

__all__ = [
    # Store
    "SupportDataStore",
    "InMemorySupportStore",
    "OrderRecord",
    "InvoiceRecord",
    "RefundRecord",
    "StoredMessage",
    # Tools
    "build_order_tools",
    "build_billing_tools",
    "build_conversation_tools",
    "FetchOrderDetailsArgs",
    "CheckDeliveryStatusArgs",
    "GetInvoiceDetailsArgs",
    "CheckRefundStatusArgs",
    "QueryConversationHistoryArgs",
]
