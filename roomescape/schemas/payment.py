"""결제 승인 Pydantic 스키마 정의.

Payment confirmation Pydantic schema definitions.
The gateway speaks camelCase JSON; these models accept both the Python
field names and the gateway aliases.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PaymentRequest(BaseModel):
    """결제 승인 요청 스키마 — 게이트웨이에 그대로 전달.

    Payment confirmation request sent to the gateway as
    {"orderId", "amount", "paymentKey"}.
    """

    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(alias="orderId")
    amount: int
    payment_key: str = Field(alias="paymentKey")

    def to_gateway_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class PaymentResponse(BaseModel):
    """결제 승인 응답 스키마.

    Payment confirmation response. Only the payment key and the confirmed
    total amount are kept; the rest of the gateway payload is ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    payment_key: str = Field(alias="paymentKey")
    total_amount: int = Field(alias="totalAmount")
