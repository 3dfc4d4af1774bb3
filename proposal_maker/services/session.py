"""
현재 제안서 세션 상태를 보관하는 컨테이너입니다.

문서는 한 번에 하나만 보관하며, 생성 중에는 새 생성 요청과 초기화를 거부합니다.
저장소 없이 프로세스 메모리에만 유지됩니다.
"""

import logging
from datetime import datetime
from typing import Optional

from proposal_maker.exceptions import GenerationInProgressError, ProposalNotFoundError
from proposal_maker.models import GenerationStatus, ProgressEvent, ProposalDocument

logger = logging.getLogger(__name__)


class ProposalSession:
    """
    단일 작성자(single-writer) 세션.

    상태 전이:
        IDLE/READY/FAILED --begin_generation--> GENERATING
        GENERATING --complete--> READY
        GENERATING --fail--> FAILED
        IDLE/READY/FAILED --reset--> IDLE
    """

    def __init__(self):
        self.status = GenerationStatus.IDLE
        self._document: Optional[ProposalDocument] = None
        self.error_message: Optional[str] = None
        self.last_event: Optional[ProgressEvent] = None
        self.updated_at = datetime.now()

    @property
    def is_generating(self) -> bool:
        return self.status == GenerationStatus.GENERATING

    @property
    def document(self) -> Optional[ProposalDocument]:
        return self._document

    def begin_generation(self) -> None:
        """새 생성을 시작합니다. 이전 문서와 에러는 비웁니다."""
        if self.is_generating:
            raise GenerationInProgressError()

        self.status = GenerationStatus.GENERATING
        self._document = None
        self.error_message = None
        self.last_event = None
        self._touch()
        logger.info("[Session] 생성 시작")

    async def record_event(self, event: ProgressEvent) -> None:
        """오케스트레이터 진행 콜백."""
        self.last_event = event
        self._touch()

    def complete(self, document: ProposalDocument) -> None:
        self.status = GenerationStatus.READY
        self._document = document
        self._touch()
        logger.info(f"[Session] 생성 완료: {document.title} ({len(document.sections)}개 섹션)")

    def fail(self, message: str) -> None:
        self.status = GenerationStatus.FAILED
        self._document = None
        self.error_message = message
        self._touch()
        logger.warning(f"[Session] 생성 실패: {message}")

    def reset(self) -> None:
        """문서를 비우고 입력 화면 상태(IDLE)로 돌아갑니다."""
        if self.is_generating:
            raise GenerationInProgressError("생성 중에는 초기화할 수 없습니다")

        self.status = GenerationStatus.IDLE
        self._document = None
        self.error_message = None
        self.last_event = None
        self._touch()
        logger.info("[Session] 초기화")

    def require_document(self) -> ProposalDocument:
        """표시할 문서를 반환합니다. 없으면 ProposalNotFoundError."""
        if self._document is None:
            raise ProposalNotFoundError()
        return self._document

    def get_progress(self) -> dict:
        """상태 조회 응답용 진행 정보."""
        event = self.last_event
        return {
            "status": self.status.value,
            "stage": event.stage.value if event else None,
            "message": event.message if event else None,
            "progress_percent": event.progress_percent if event else 0,
            "error_message": self.error_message,
            "has_document": self._document is not None,
            "updated_at": self.updated_at.isoformat(),
        }

    def _touch(self) -> None:
        self.updated_at = datetime.now()


_proposal_session: Optional[ProposalSession] = None


def get_proposal_session() -> ProposalSession:
    """세션 싱글톤 인스턴스를 반환합니다."""
    global _proposal_session
    if _proposal_session is None:
        _proposal_session = ProposalSession()
    return _proposal_session
