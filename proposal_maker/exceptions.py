"""
제안서 생성 시스템 커스텀 예외 계층입니다.
단계(생성/이미지/내보내기)별 구조화된 에러 코드와 메시지를 제공합니다.
"""

from typing import Optional, Any


class ProposalMakerError(Exception):
    """제안서 생성 시스템 기본 예외 클래스."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Any] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class InputValidationError(ProposalMakerError):
    """입력 유효성 검증 에러 (400 응답). 빈 메모 등."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_INPUT_001", details=details)


class GenerationError(ProposalMakerError):
    """제안서 본문(텍스트) 생성 실패. 전체 작업이 중단됩니다."""

    status_code = 502

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_GEN_001", details=details)


class ModelClientError(ProposalMakerError):
    """생성 모델 API 통신 또는 응답 파싱 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_MODEL_001", details=details)


class ImageGenerationError(ProposalMakerError):
    """목업 이미지 생성 에러 (섹션 단위로 격리됨)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_IMAGE_001", details=details)


class ExportError(ProposalMakerError):
    """내보내기 중 이미지 임베딩 에러 (이미지 단위로 격리됨)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_EXPORT_001", details=details)


class GenerationInProgressError(ProposalMakerError):
    """이미 생성 작업이 진행 중일 때 (409 응답)."""

    status_code = 409

    def __init__(self, message: str = "제안서 생성이 이미 진행 중입니다", details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_BUSY_001", details=details)


class ProposalNotFoundError(ProposalMakerError):
    """표시할 제안서가 없을 때 (404 응답)."""

    status_code = 404

    def __init__(self, message: str = "생성된 제안서가 없습니다", details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_NOT_FOUND_001", details=details)
