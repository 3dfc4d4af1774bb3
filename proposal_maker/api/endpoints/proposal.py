"""
제안서 API입니다.
메모로 제안서를 생성하고, 현재 제안서를 조회/미리보기/내보내기/초기화합니다.

세션에는 제안서가 하나만 존재하며, 생성 중에는 새 생성과 초기화가 거부됩니다 (409).
"""

import asyncio
import logging
from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from proposal_maker.exceptions import InputValidationError, ProposalMakerError
from proposal_maker.export import get_exporter
from proposal_maker.rendering import render_document
from proposal_maker.services import get_orchestrator, get_proposal_session

logger = logging.getLogger(__name__)

router = APIRouter()

GENERATION_CANCELLED_MESSAGE = "Proposal generation was cancelled. Please try again."


class GenerateProposalRequest(BaseModel):
    """제안서 생성 요청 (자유 형식 메모)"""
    notes: str


def _content_disposition(filename: str) -> str:
    """ASCII 대체 이름과 UTF-8 이름을 함께 지정한 첨부파일 헤더."""
    fallback = filename.encode("ascii", "ignore").decode("ascii").replace('"', "")
    if not fallback or fallback == ".html":
        fallback = "proposal.html"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.post("/generate")
async def generate_proposal(request: GenerateProposalRequest) -> dict:
    """
    메모로 제안서를 생성합니다.

    처리 단계:
    1. 텍스트: 제안서 본문(JSON) 생성
    2. 이미지: 목업 섹션별 이미지 병렬 생성

    진행 상황은 GET /proposal/status 로 조회할 수 있습니다.
    """
    session = get_proposal_session()
    orchestrator = get_orchestrator()

    # 빈 메모는 기존 제안서를 건드리지 않고 거부
    if not request.notes.strip():
        raise InputValidationError("Please provide project details.")

    session.begin_generation()
    logger.info(f"[API] 제안서 생성 요청: 메모 {len(request.notes)}자")
    try:
        document = await orchestrator.generate(request.notes, on_progress=session.record_event)
    except ProposalMakerError as e:
        session.fail(e.message)
        raise
    except asyncio.CancelledError:
        # 요청 취소 시에도 세션은 FAILED로 전환
        session.fail(GENERATION_CANCELLED_MESSAGE)
        raise
    except Exception as e:
        session.fail(str(e))
        raise

    session.complete(document)

    mockups = [s for s in document.sections if s.kind == "mockup"]
    return {
        "status": session.status.value,
        "page_count": document.page_count,
        "image_count": sum(1 for s in mockups if s.mockup_image_url),
        "mockup_count": len(mockups),
        "proposal": document.to_wire(),
    }


@router.get("")
async def get_proposal() -> dict:
    """현재 제안서 JSON 조회"""
    document = get_proposal_session().require_document()
    return document.to_wire()


@router.get("/status")
async def get_proposal_status() -> dict:
    """세션 상태와 마지막 진행 이벤트 조회"""
    return get_proposal_session().get_progress()


@router.get("/preview", response_class=HTMLResponse)
async def preview_proposal() -> HTMLResponse:
    """현재 제안서를 인쇄 가능한 HTML 페이지로 반환합니다."""
    document = get_proposal_session().require_document()
    return HTMLResponse(content=render_document(document, standalone=True))


@router.get("/export")
async def export_proposal() -> Response:
    """
    현재 제안서를 단독 HTML 파일로 다운로드합니다.
    원격 이미지는 data URL로 변환되어 파일 안에 포함됩니다.
    """
    document = get_proposal_session().require_document()
    exported = await get_exporter().export(document)

    return Response(
        content=exported.html,
        media_type="text/html",
        headers={"Content-Disposition": _content_disposition(exported.filename)},
    )


@router.delete("")
async def reset_proposal() -> dict:
    """현재 제안서를 비우고 세션을 초기화합니다."""
    session = get_proposal_session()
    session.reset()
    return {"status": session.status.value, "message": "세션이 초기화되었습니다"}
