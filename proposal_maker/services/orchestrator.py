"""
제안서 생성 흐름을 관리하는 오케스트레이터입니다.

처리 단계:
1. 텍스트 (Text): 메모를 프롬프트에 담아 한 번 호출하고 JSON 문서를 받습니다.
2. 이미지 (Images): 목업 섹션마다 이미지를 동시에 요청하고 섹션 위치에 반영합니다.

텍스트 단계 실패는 전체 실패(GenerationError)이고,
이미지 단계 실패는 해당 섹션에만 격리됩니다 (이미지 없이 표시).
"""

import asyncio
import inspect
import logging
from datetime import date, datetime
from typing import Any, Callable, Optional

from pydantic import ValidationError

from proposal_maker.exceptions import (
    GenerationError,
    InputValidationError,
    ProposalMakerError,
)
from proposal_maker.models import (
    GenerationStage,
    ProgressEvent,
    ProposalDocument,
)
from proposal_maker.prompts import build_proposal_prompt
from proposal_maker.services.gemini_client import GeminiClient, get_gemini_client

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = (
    "Failed to generate proposal. The AI model may have returned an invalid format. "
    "Please try again."
)

ProgressCallback = Callable[[ProgressEvent], Any]


class ProposalOrchestrator:
    """
    2단계 제안서 생성 과정을 조율하는 클래스입니다.

    Attributes:
        client: 텍스트/이미지 생성 클라이언트 (기본값: Gemini 싱글톤)
    """

    def __init__(self, client: Optional[GeminiClient] = None):
        self.client = client or get_gemini_client()

    async def generate(
        self,
        notes: str,
        on_progress: Optional[ProgressCallback] = None,
        today: Optional[date] = None,
    ) -> ProposalDocument:
        """
        메모로부터 제안서 문서를 생성합니다.

        Args:
            notes: 자유 형식 프로젝트 메모
            on_progress: 진행 이벤트 콜백 (동기/비동기 함수 모두 가능)
            today: 제안서 작성일 (기본값: 오늘)

        Returns:
            이미지 URL이 반영된 최종 문서

        Raises:
            InputValidationError: 메모가 비어있는 경우 (모델 호출 없음)
            GenerationError: 텍스트 생성 또는 응답 해석 실패
        """
        if notes is None or not notes.strip():
            raise InputValidationError("Please provide project details.")

        started_at = datetime.now()

        # ========== 1단계: 텍스트 생성 ==========
        await self._emit_event(
            on_progress, "stage_start", GenerationStage.TEXT, "제안서 본문 생성 시작", 5
        )
        try:
            document = await self._generate_text(notes, today)
        except GenerationError as e:
            await self._emit_event(
                on_progress, "error", GenerationStage.TEXT, e.message, 0
            )
            raise

        targets = document.image_targets()
        await self._emit_event(
            on_progress, "stage_complete", GenerationStage.TEXT,
            f"{len(document.sections)}개 섹션 생성 완료",
            50,
            data={"section_count": len(document.sections), "image_count": len(targets)},
        )

        # ========== 2단계: 목업 이미지 생성 ==========
        if targets:
            await self._emit_event(
                on_progress, "stage_start", GenerationStage.IMAGES,
                f"목업 이미지 {len(targets)}개 생성 시작",
                55,
            )
            image_urls = await self._generate_images(targets)
            document = document.with_image_urls(image_urls)
            await self._emit_event(
                on_progress, "stage_complete", GenerationStage.IMAGES,
                f"목업 이미지 {len(image_urls)}/{len(targets)}개 생성 완료",
                95,
                data={"requested": len(targets), "succeeded": len(image_urls)},
            )

        elapsed = (datetime.now() - started_at).total_seconds()
        logger.info(f"[Orchestrator] 제안서 생성 완료: '{document.title}' ({elapsed:.1f}초)")

        await self._emit_event(
            on_progress, "stage_complete", GenerationStage.DONE, "제안서 생성 완료", 100
        )
        return document

    async def _generate_text(self, notes: str, today: Optional[date]) -> ProposalDocument:
        """1단계: 단일 프롬프트 호출 후 문서 모델로 변환."""
        prompt = build_proposal_prompt(notes, today)

        try:
            data = await self.client.complete_json(prompt)
            if not isinstance(data, dict):
                raise GenerationError(
                    GENERATION_FAILED_MESSAGE,
                    details={"reason": f"expected JSON object, got {type(data).__name__}"},
                )
            document = ProposalDocument.model_validate(data)

        except GenerationError:
            raise
        except ValidationError as e:
            logger.error(f"[Orchestrator] 응답 스키마 불일치: {e.error_count()}개 오류")
            raise GenerationError(
                GENERATION_FAILED_MESSAGE,
                details={"reason": "schema_mismatch", "errors": e.error_count()},
            ) from e
        except ProposalMakerError as e:
            logger.error(f"[Orchestrator] 텍스트 생성 실패: {e.message}")
            raise GenerationError(
                GENERATION_FAILED_MESSAGE,
                details={"reason": e.error_code},
            ) from e
        except Exception as e:
            logger.error(f"[Orchestrator] 텍스트 생성 실패: {type(e).__name__}: {e}")
            raise GenerationError(
                GENERATION_FAILED_MESSAGE,
                details={"reason": type(e).__name__},
            ) from e

        logger.info(
            f"[Orchestrator] 문서 수신: {len(document.sections)}개 섹션, "
            f"테마={document.theme.value}"
        )
        return document

    async def _generate_images(self, targets: list) -> dict[int, str]:
        """
        2단계: 목업 이미지 병렬 생성.

        요청 시점의 섹션 위치(index)를 결과와 짝지어 반환합니다.
        실패한 요청은 결과에서 빠지며 나머지에는 영향을 주지 않습니다.
        """
        start = datetime.now()

        results = await asyncio.gather(
            *[self.client.generate_image(section.mockup_image_prompt) for _, section in targets],
            return_exceptions=True,
        )

        image_urls: dict[int, str] = {}
        for (index, section), result in zip(targets, results):
            if isinstance(result, BaseException):
                logger.error(
                    f"[Orchestrator] 섹션 {index} ('{section.heading}') 이미지 생성 실패: "
                    f"{type(result).__name__}: {result}"
                )
                continue
            if not result:
                logger.error(f"[Orchestrator] 섹션 {index} ('{section.heading}') 이미지 결과 없음")
                continue
            image_urls[index] = result

        elapsed = (datetime.now() - start).total_seconds()
        logger.info(
            f"[Orchestrator] 이미지 {len(image_urls)}/{len(targets)}개 성공 ({elapsed:.1f}초)"
        )
        return image_urls

    async def _emit_event(
        self,
        callback: Optional[ProgressCallback],
        event_type: str,
        stage: GenerationStage,
        message: str,
        progress_percent: int,
        data: Optional[dict] = None,
    ):
        """진행 상황 알림 이벤트를 발생시키는 함수"""
        if callback:
            event = ProgressEvent(
                event_type=event_type,
                stage=stage,
                message=message,
                progress_percent=progress_percent,
                data=data,
            )
            result = callback(event)
            if inspect.isawaitable(result):
                await result


# 싱글톤 인스턴스
_orchestrator: Optional[ProposalOrchestrator] = None


def get_orchestrator() -> ProposalOrchestrator:
    """오케스트레이터 인스턴스를 가져오거나 생성하는 함수"""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ProposalOrchestrator()
    return _orchestrator
