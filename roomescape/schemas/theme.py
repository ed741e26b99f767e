"""테마 및 예약 시간 Pydantic 요청/응답 스키마 정의.

Theme and reservation time Pydantic request/response schema definitions.
"""

from datetime import time

from pydantic import BaseModel, Field


class ThemeCreate(BaseModel):
    """테마 생성 요청 스키마.

    Theme creation request schema.

    Attributes:
        name: 테마 이름 (Theme name, unique)
        description: 테마 설명 (Description, optional)
        thumbnail: 썸네일 URL (Thumbnail URL, optional)
    """

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    thumbnail: str | None = None


class ThemeResponse(BaseModel):
    """테마 응답 스키마."""

    id: int
    name: str
    description: str | None = None
    thumbnail: str | None = None


class ReservationTimeCreate(BaseModel):
    """예약 시간 생성 요청 스키마.

    Reservation time creation request schema, e.g. {"start_at": "10:00"}.
    """

    start_at: time


class ReservationTimeResponse(BaseModel):
    """예약 시간 응답 스키마."""

    id: int
    start_at: time
