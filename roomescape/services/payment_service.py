"""결제 서비스 — 외부 결제 게이트웨이 승인 호출.

Payment Service — Confirms payments with the external payment gateway.
A single outbound POST per confirmation; no retry or reconciliation.
Gateway and transport failures surface as PaymentError.
"""

import base64

import httpx

from roomescape.config import settings
from roomescape.models.reservation import Reservation
from roomescape.schemas.payment import PaymentRequest, PaymentResponse
from roomescape.utils.exceptions import PaymentError


class PaymentService:
    """결제 게이트웨이 승인 API를 호출하는 서비스.

    Service calling the payment gateway confirmation API.

    Attributes:
        transport: httpx 전송 계층, None이면 기본 네트워크 전송
                   (httpx transport; None uses the default network transport)
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.transport: httpx.AsyncBaseTransport | None = transport

    def _authorization_header(self) -> str:
        """시크릿 키로 Basic 인증 헤더를 만듭니다. 형식: base64("{secret}:")."""
        token: str = base64.b64encode(f"{settings.PAYMENT_SECRET_KEY}:".encode("utf-8")).decode("utf-8")
        return f"Basic {token}"

    def _to_error(self, response: httpx.Response) -> PaymentError:
        """게이트웨이 오류 응답을 PaymentError로 변환합니다.

        Convert a gateway error response into a PaymentError.
        4xx keeps the gateway status, except 401: the gateway rejected our
        secret key, which is a server-side failure and becomes 502 like 5xx.
        """
        message: str = "결제 승인에 실패했습니다. (Payment confirmation failed)"
        try:
            body = response.json()
            if isinstance(body, dict) and body.get("message"):
                message = body["message"]
        except ValueError:
            pass

        if response.status_code == 401:
            # 시크릿 키 오류 메시지는 전달하지 않음 — The gateway's key error message is not forwarded
            return PaymentError("결제 승인에 실패했습니다. (Payment confirmation failed)")
        if response.status_code < 500:
            return PaymentError(message, status_code=response.status_code)
        return PaymentError(message)

    async def confirm(self, request: PaymentRequest) -> PaymentResponse:
        """결제 승인을 요청합니다.

        Submit order id, amount and payment key to the gateway and return
        the confirmed payment key and total amount.

        Args:
            request: 결제 승인 요청 (Payment confirmation request)

        Returns:
            PaymentResponse: 승인된 결제 키와 금액 (Confirmed payment key and total amount)

        Raises:
            PaymentError: 게이트웨이 거절, 장애 또는 통신 실패
                          (Gateway rejection, outage or transport failure)
        """
        timeout = httpx.Timeout(
            settings.PAYMENT_READ_TIMEOUT,
            connect=settings.PAYMENT_CONNECT_TIMEOUT,
        )
        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=timeout) as client:
                response: httpx.Response = await client.post(
                    settings.PAYMENT_CONFIRM_URL,
                    json=request.to_gateway_body(),
                    headers={"Authorization": self._authorization_header()},
                )
        except httpx.HTTPError as exc:
            raise PaymentError(
                f"결제 서버와 통신할 수 없습니다. (Payment gateway unreachable: {type(exc).__name__})"
            ) from exc

        if response.is_error:
            raise self._to_error(response)

        try:
            return PaymentResponse.model_validate(response.json())
        except ValueError as exc:
            raise PaymentError("결제 승인 응답을 해석할 수 없습니다. (Malformed gateway response)") from exc

    async def pay(self, request: PaymentRequest, reservation: Reservation) -> PaymentResponse:
        """결제를 승인하고 결과를 예약에 기록합니다.

        Confirm the payment and record the order id, payment key and
        confirmed amount on the reservation.

        Args:
            request: 결제 승인 요청 (Payment confirmation request)
            reservation: 결제 대상 예약 (Reservation being paid for)

        Returns:
            PaymentResponse: 승인 결과 (Confirmation result)
        """
        result: PaymentResponse = await self.confirm(request)
        reservation.confirm_payment(request.order_id, result.payment_key, result.total_amount)
        return result


# 싱글턴 인스턴스 — Singleton instance
payment_service: PaymentService = PaymentService()
