"""
AI 제안서 생성 서비스의 메인 진입점 파일입니다.
웹 서버 애플리케이션을 생성하고 설정하는 역할을 담당합니다.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from proposal_maker.config import get_settings
from proposal_maker.api.router import api_router
from proposal_maker.exceptions import ProposalMakerError
from proposal_maker.models import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 시작/종료 로그."""
    settings = get_settings()
    logger.info(f"제안서 생성기가 다음 주소에서 시작됩니다: {settings.host}:{settings.port}")
    logger.info(f"텍스트 모델: {settings.text_model}, 이미지 모델: {settings.image_model}")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY가 설정되지 않았습니다. 생성 요청은 실패합니다")

    yield

    logger.info("제안서 생성기가 종료됩니다")


def create_app() -> FastAPI:
    """
    FastAPI 웹 애플리케이션을 생성하고 설정하는 함수입니다.

    주요 기능:
    1. 기본 앱 정보 설정 (제목, 설명 등)
    2. CORS 설정
    3. 커스텀 예외를 구조화된 JSON 응답으로 변환
    4. API 라우터 연결
    """
    settings = get_settings()

    app = FastAPI(
        title="AI 제안서 생성 시스템",
        description="프로젝트 메모를 페이지 단위의 인쇄 가능한 제안서로 변환",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 글로벌 예외 핸들러: 예외 클래스마다 지정된 HTTP 상태 코드 사용
    @app.exception_handler(ProposalMakerError)
    async def proposal_error_handler(request: Request, exc: ProposalMakerError):
        body = ErrorResponse(
            error_code=exc.error_code,
            message=exc.message,
            details=exc.details,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.error(f"처리되지 않은 예외: {exc}", exc_info=True)
        body = ErrorResponse(
            error_code="ERR_INTERNAL",
            message="내부 서버 오류가 발생했습니다",
        )
        return JSONResponse(status_code=500, content=body.model_dump(mode="json"))

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """서비스 기본 정보."""
        return {
            "name": "AI 제안서 생성 시스템",
            "version": "1.0.0",
            "description": "프로젝트 메모를 제안서로 변환",
            "docs": "/docs",
            "api": "/api/v1",
        }

    return app


# 애플리케이션 인스턴스 생성
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "proposal_maker.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
