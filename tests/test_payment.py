"""결제 서비스 테스트 — 게이트웨이 승인 요청과 오류 매핑.

Payment service tests — Confirmation request format, Basic auth header,
and mapping of gateway rejections, outages and transport failures.
"""

import base64
import json

import httpx
import pytest

from roomescape.config import settings
from roomescape.schemas.payment import PaymentRequest
from roomescape.services.payment_service import PaymentService
from roomescape.utils.exceptions import PaymentError


def make_request() -> PaymentRequest:
    return PaymentRequest(order_id="order-1", amount=21000, payment_key="pk-1")


class TestPaymentConfirm:
    """결제 승인 요청 테스트."""

    async def test_confirm_returns_key_and_amount(self):
        """승인 성공 시 결제 키와 금액 반환."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"paymentKey": "pk-1", "totalAmount": 21000, "status": "DONE"})

        result = await PaymentService(transport=httpx.MockTransport(handler)).confirm(make_request())
        assert result.payment_key == "pk-1"
        assert result.total_amount == 21000

    async def test_confirm_request_format(self):
        """승인 요청은 Basic 인증 헤더와 camelCase JSON 본문으로 전송."""
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"paymentKey": "pk-1", "totalAmount": 21000})

        await PaymentService(transport=httpx.MockTransport(handler)).confirm(make_request())

        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == settings.PAYMENT_CONFIRM_URL
        expected = base64.b64encode(f"{settings.PAYMENT_SECRET_KEY}:".encode("utf-8")).decode("utf-8")
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert json.loads(request.content) == {"orderId": "order-1", "amount": 21000, "paymentKey": "pk-1"}


class TestPaymentErrors:
    """결제 오류 매핑 테스트."""

    @pytest.mark.parametrize("status_code", [400, 403, 404])
    async def test_client_error_keeps_status_and_message(self, status_code: int):
        """게이트웨이 4xx는 같은 상태 코드와 게이트웨이 메시지로 전달."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json={"code": "REJECTED", "message": "결제가 거절되었습니다."})

        with pytest.raises(PaymentError) as exc_info:
            await PaymentService(transport=httpx.MockTransport(handler)).confirm(make_request())
        assert exc_info.value.status_code == status_code
        assert exc_info.value.detail == "결제가 거절되었습니다."

    async def test_rejected_secret_key_becomes_bad_gateway(self):
        """시크릿 키 인증 실패(401)는 서버 측 오류로 502 변환, 게이트웨이 메시지는 숨김."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"code": "UNAUTHORIZED_KEY", "message": "인증되지 않은 시크릿 키 혹은 클라이언트 키 입니다."})

        with pytest.raises(PaymentError) as exc_info:
            await PaymentService(transport=httpx.MockTransport(handler)).confirm(make_request())
        assert exc_info.value.status_code == 502
        assert "시크릿 키" not in exc_info.value.detail

    async def test_server_error_becomes_bad_gateway(self):
        """게이트웨이 5xx는 502로 변환."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"code": "FAILED_INTERNAL_SYSTEM_PROCESSING", "message": "점검 중"})

        with pytest.raises(PaymentError) as exc_info:
            await PaymentService(transport=httpx.MockTransport(handler)).confirm(make_request())
        assert exc_info.value.status_code == 502

    async def test_non_json_error_uses_default_message(self):
        """JSON이 아닌 오류 응답은 기본 메시지 사용."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, text="bad request")

        with pytest.raises(PaymentError) as exc_info:
            await PaymentService(transport=httpx.MockTransport(handler)).confirm(make_request())
        assert exc_info.value.status_code == 400
        assert "Payment confirmation failed" in exc_info.value.detail

    async def test_transport_error_becomes_bad_gateway(self):
        """연결 실패는 502로 변환."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(PaymentError) as exc_info:
            await PaymentService(transport=httpx.MockTransport(handler)).confirm(make_request())
        assert exc_info.value.status_code == 502

    async def test_timeout_becomes_bad_gateway(self):
        """응답 타임아웃은 502로 변환."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(PaymentError) as exc_info:
            await PaymentService(transport=httpx.MockTransport(handler)).confirm(make_request())
        assert exc_info.value.status_code == 502

    async def test_malformed_success_response(self):
        """승인 응답에 필수 필드가 없으면 PaymentError."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "DONE"})

        with pytest.raises(PaymentError) as exc_info:
            await PaymentService(transport=httpx.MockTransport(handler)).confirm(make_request())
        assert exc_info.value.status_code == 502
