"""
헬스 체크(Health Check) 엔드포인트입니다.
"""

from fastapi import APIRouter

from proposal_maker.config import get_settings
from proposal_maker.services import get_proposal_session

router = APIRouter()


@router.get("")
async def health_check():
    """서버가 켜져 있으면 {"status": "healthy"}를 반환합니다."""
    return {"status": "healthy"}


@router.get("/detail")
async def health_check_detail():
    """
    상세 상태 확인 함수.
    사용 중인 모델과 API 키 설정 여부, 현재 세션 상태를 함께 보여줍니다.
    """
    settings = get_settings()
    session = get_proposal_session()
    return {
        "status": "healthy",
        "config": {
            "text_model": settings.text_model,
            "image_model": settings.image_model,
            "default_theme": settings.default_theme,
            "api_key_configured": bool(settings.gemini_api_key),
        },
        "session": {
            "status": session.status.value,
            "has_document": session.document is not None,
        },
    }
