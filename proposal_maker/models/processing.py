"""
생성 작업 상태 관련 데이터 모델입니다.
세션의 상태, 진행 이벤트 등을 정의합니다.
"""

from enum import Enum
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class GenerationStatus(str, Enum):
    """
    제안서 생성 세션의 상태 단계입니다.
    """

    IDLE = "idle"               # 생성된 문서 없음
    GENERATING = "generating"   # 생성 중 (새 요청 거부)
    READY = "ready"             # 문서 표시 가능
    FAILED = "failed"           # 마지막 생성 실패


class GenerationStage(str, Enum):
    """생성 파이프라인 단계."""

    TEXT = "text"        # 1단계: 제안서 본문(JSON) 생성
    IMAGES = "images"    # 2단계: 목업 이미지 생성
    DONE = "done"


class ProgressEvent(BaseModel):
    """
    진행 상황을 클라이언트에 알리기 위한 이벤트 모델입니다.
    """

    event_type: str = Field(
        ..., description="이벤트 종류: stage_start, stage_complete, error"
    )
    stage: GenerationStage
    message: str
    progress_percent: int = 0
    timestamp: datetime = Field(default_factory=datetime.now)
    data: Optional[dict] = None
