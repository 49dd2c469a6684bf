# errors.py
"""
공통 에러 타입 정의
- 도메인 에러: 저장소/도메인 계층에서 발생, HTTP를 모름
- HTTP 에러: 라우터에서 도메인 에러를 변환해 응답 (내부 상세 메시지 노출 금지)
"""
from typing import Optional

from fastapi import HTTPException, status

class RecipeServiceError(Exception):
    """레시피 도메인 에러 최상위 타입"""

class ValidationError(RecipeServiceError):
    """입력이 데이터 모델 불변식을 위반 (빈 이름, 알 수 없는 enum 값 등)"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

class NotFoundError(RecipeServiceError):
    """요청한 레시피 ID가 존재하지 않음"""

    def __init__(self, recipe_id: int):
        super().__init__(f"recipe_id={recipe_id} 레시피가 존재하지 않습니다.")
        self.recipe_id = recipe_id

class StorageError(RecipeServiceError):
    """DB 접속 실패, 커밋 실패, 예상치 못한 제약조건 위반 등"""


class BadRequestException(HTTPException):
    """400 에러 - 잘못된 요청"""
    def __init__(self, detail: str = "잘못된 요청입니다."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class NotFoundException(HTTPException):
    """404 에러 - 항목 없음"""
    def __init__(self, name: str = "데이터"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"{name}을(를) 찾을 수 없습니다.")

class InternalServerErrorException(HTTPException):
    """500 에러 - 서버 내부 오류"""
    def __init__(self, detail: str = "서버 내부 오류가 발생했습니다."):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
