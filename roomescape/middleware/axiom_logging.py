"""Axiom 예약 API 로깅 미들웨어.

Axiom logging middleware for the reservation API.
Each call becomes one Axiom event keyed by its route template
("/api/v1/app/reservations/{reservation_id}") with the calling member,
the reservation id, the masked payload and, for failures, the reason
returned to the client. Payment keys, passwords and tokens never leave
the process.
"""

import json
import re
import time
from typing import Any

import jwt
from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from roomescape.config import settings
from roomescape.utils.jwt import member_id_from_token

# 마스킹 대상 — password, *token, payment_key / paymentKey, secret, authorization
_SENSITIVE_KEYS = re.compile(r"password|token|payment_?key|secret|authorization", re.IGNORECASE)

_UNLOGGED_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
_MAX_REASON = 500


def _mask_dict(data: Any) -> Any:
    """민감 필드를 "***"로 바꿉니다 (중첩 dict/list 포함)."""
    if isinstance(data, dict):
        return {k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_mask_dict(item) for item in data]
    return data


def _caller(request: Request) -> int | None:
    """Bearer 토큰의 회원 ID. 토큰이 없거나 유효하지 않으면 None."""
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    try:
        return member_id_from_token(token)
    except jwt.InvalidTokenError:
        return None


def _reason(body: bytes) -> str:
    """오류 응답의 detail — FastAPI 오류 본문이 아니면 원문."""
    try:
        detail: Any = json.loads(body).get("detail", body.decode())
    except (ValueError, AttributeError):
        detail = body.decode("utf-8", errors="replace")
    return (detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False))[:_MAX_REASON]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """예약 API 호출을 Axiom 이벤트로 남기는 미들웨어.

    Without AXIOM_API_TOKEN / AXIOM_DATASET (or an injected client)
    requests pass through untouched.
    """

    def __init__(self, app: Any, client: AxiomClient | None = None) -> None:
        super().__init__(app)
        if client is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            client = AxiomClient(token=settings.AXIOM_API_TOKEN)
        self._client: AxiomClient | None = client

    async def _payload(self, request: Request) -> Any:
        if request.method not in _BODY_METHODS:
            return None
        raw: bytes = await request.body()
        if not raw:
            return None
        try:
            return _mask_dict(json.loads(raw))
        except ValueError:
            return "(non-json body)"

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._client is None or request.url.path in _UNLOGGED_PATHS:
            return await call_next(request)

        started: float = time.perf_counter()
        event: dict[str, Any] = {
            "service": settings.APP_NAME,
            "method": request.method,
            "path": request.url.path,
            "member_id": _caller(request),
            "request_body": await self._payload(request),
        }
        if request.query_params:
            event["query_params"] = _mask_dict(dict(request.query_params))

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            event.update(status_code=500, error=f"{type(exc).__name__}: {exc}"[:_MAX_REASON])
            self._ingest(event, started, request)
            raise

        event["status_code"] = response.status_code
        if response.status_code >= 400:
            # 본문을 읽어 사유를 기록한 뒤 같은 본문으로 응답을 다시 만듦
            body: bytes = b"".join([chunk async for chunk in response.body_iterator])
            event["error"] = _reason(body)
            response = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type,
            )
        self._ingest(event, started, request)
        return response

    def _ingest(self, event: dict[str, Any], started: float, request: Request) -> None:
        # 라우팅 후에만 채워지는 값 — Route template and path params are set by the router
        route = request.scope.get("route")
        event["route"] = getattr(route, "path", event["path"])
        if "reservation_id" in request.path_params:
            event["reservation_id"] = request.path_params["reservation_id"]
        event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)

        try:
            self._client.ingest_events(settings.AXIOM_DATASET, [{k: v for k, v in event.items() if v is not None}])
        except Exception:
            pass  # Axiom 장애는 예약 응답에 영향을 주지 않음
