"""Axiom 로깅 미들웨어 테스트 — 이벤트 구성과 민감 정보 마스킹.

Axiom logging middleware tests — Event contents, sensitive field
masking, skipped paths, and resilience to ingest failures.
"""

from typing import Any

from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient

from roomescape.middleware.axiom_logging import AxiomLoggingMiddleware, _mask_dict
from roomescape.utils.jwt import create_access_token


class RecordingAxiomClient:
    """ingest_events 호출을 기록하는 가짜 Axiom 클라이언트."""

    def __init__(self, fail: bool = False) -> None:
        self.events: list[dict[str, Any]] = []
        self.fail = fail

    def ingest_events(self, dataset: str, events: list[dict[str, Any]]) -> None:
        if self.fail:
            raise RuntimeError("axiom unavailable")
        self.events.extend(events)


def build_app(axiom_client: RecordingAxiomClient) -> FastAPI:
    app = FastAPI()
    app.add_middleware(AxiomLoggingMiddleware, client=axiom_client)

    @app.post("/api/v1/app/reservations")
    async def create(body: dict) -> dict:
        return {"ok": True}

    @app.get("/api/v1/app/reservations/{reservation_id}")
    async def read(reservation_id: int) -> dict:
        raise HTTPException(status_code=404, detail=f"존재하지 않는 예약입니다. 요청 예약 id:{reservation_id}")

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app


class TestMaskDict:
    """민감 필드 마스킹 테스트."""

    def test_masks_sensitive_keys(self):
        masked = _mask_dict({"password": "pw", "payment_key": "pk", "paymentKey": "pk", "amount": 21000})
        assert masked == {"password": "***", "payment_key": "***", "paymentKey": "***", "amount": 21000}

    def test_masks_nested(self):
        masked = _mask_dict({"member": {"email": "a@b.c", "access_token": "t"}})
        assert masked == {"member": {"email": "a@b.c", "access_token": "***"}}


class TestAxiomLoggingMiddleware:
    """미들웨어 이벤트 테스트."""

    async def test_logs_masked_request(self):
        """요청 이벤트에 결제 키가 마스킹되어 기록."""
        axiom_client = RecordingAxiomClient()
        async with AsyncClient(transport=ASGITransport(app=build_app(axiom_client)), base_url="http://test") as ac:
            res = await ac.post("/api/v1/app/reservations", json={"payment_key": "pk-1", "amount": 21000})
        assert res.status_code == 200

        event = axiom_client.events[0]
        assert event["method"] == "POST"
        assert event["path"] == "/api/v1/app/reservations"
        assert event["status_code"] == 200
        assert event["request_body"] == {"payment_key": "***", "amount": 21000}
        assert "duration_ms" in event

    async def test_logs_error_detail(self):
        """오류 응답은 사유와 함께 기록되고 응답 본문은 그대로 전달."""
        axiom_client = RecordingAxiomClient()
        async with AsyncClient(transport=ASGITransport(app=build_app(axiom_client)), base_url="http://test") as ac:
            res = await ac.get("/api/v1/app/reservations/7")
        assert res.status_code == 404
        assert res.json()["detail"] == "존재하지 않는 예약입니다. 요청 예약 id:7"
        assert axiom_client.events[0]["error"] == "존재하지 않는 예약입니다. 요청 예약 id:7"

    async def test_skips_health(self):
        """헬스 체크는 기록하지 않음."""
        axiom_client = RecordingAxiomClient()
        async with AsyncClient(transport=ASGITransport(app=build_app(axiom_client)), base_url="http://test") as ac:
            await ac.get("/health")
        assert axiom_client.events == []

    async def test_ingest_failure_does_not_break_request(self):
        """Axiom 전송 실패가 응답에 영향을 주지 않음."""
        axiom_client = RecordingAxiomClient(fail=True)
        async with AsyncClient(transport=ASGITransport(app=build_app(axiom_client)), base_url="http://test") as ac:
            res = await ac.post("/api/v1/app/reservations", json={"amount": 1})
        assert res.status_code == 200

    async def test_event_carries_route_member_and_reservation(self):
        """이벤트에 라우트 템플릿, 토큰의 회원 ID, 예약 ID가 기록."""
        axiom_client = RecordingAxiomClient()
        token = create_access_token({"sub": "42", "role": "USER"})
        async with AsyncClient(transport=ASGITransport(app=build_app(axiom_client)), base_url="http://test") as ac:
            await ac.get("/api/v1/app/reservations/7", headers={"Authorization": f"Bearer {token}"})

        event = axiom_client.events[0]
        assert event["route"] == "/api/v1/app/reservations/{reservation_id}"
        assert event["member_id"] == 42
        assert event["reservation_id"] == 7

    async def test_invalid_token_logged_without_member(self):
        """유효하지 않은 토큰이면 회원 ID 없이 기록."""
        axiom_client = RecordingAxiomClient()
        async with AsyncClient(transport=ASGITransport(app=build_app(axiom_client)), base_url="http://test") as ac:
            await ac.post(
                "/api/v1/app/reservations",
                json={"amount": 1},
                headers={"Authorization": "Bearer not.a.token"},
            )
        assert "member_id" not in axiom_client.events[0]
