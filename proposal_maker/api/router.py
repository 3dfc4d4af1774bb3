"""
API 라우터 설정 파일입니다.
각 기능별로 나누어진 API 주소들을 하나로 모으는 역할을 합니다.
"""

from fastapi import APIRouter

from proposal_maker.api.endpoints import health, proposal

# 메인 API 라우터 생성
api_router = APIRouter()

# 헬스 체크 엔드포인트: 서버 상태 확인용 (/health)
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

# 제안서 엔드포인트: 생성, 조회, 미리보기, 내보내기, 초기화 (/proposal)
api_router.include_router(
    proposal.router,
    prefix="/proposal",
    tags=["proposal"]
)
