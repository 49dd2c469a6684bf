"""
레시피 CRUD API 라우터
- HTTP 요청/응답을 담당
- 파라미터 파싱, 의존성 주입 (Depends)
- 트랜잭션은 저장소가 연산 단위로 관리, 라우터는 호출과 에러 변환만 수행
- ValidationError -> 400, NotFoundError -> 404, StorageError -> 500
- 응답의 재료 항목에는 name/quantity/quantity_type 외에 ingredient_id, ingredient_order 도 포함
  (요청 바디에 넣은 ID/순서 값은 무시, 재료 순서는 배열 순서로 결정)
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from common.dependencies import get_recipe_repository
from common.errors import (
    BadRequestException,
    InternalServerErrorException,
    NotFoundError,
    NotFoundException,
    StorageError,
    ValidationError,
)
from common.logger import get_logger_from_env
from services.recipe.crud.recipe_repository import RecipeRepository
from services.recipe.schemas.recipe_schema import Recipe, RecipeDraft

logger = get_logger_from_env("recipe_router")
router = APIRouter(prefix="/recipes", tags=["Recipe"])


@router.get("", response_model=List[Recipe])
async def list_recipes(
        repository: RecipeRepository = Depends(get_recipe_repository)
):
    """
    전체 레시피 목록 조회 (recipe_id 오름차순, 페이지네이션 없음)
    """
    logger.info("레시피 목록 조회 API 호출")

    try:
        recipes = await repository.list()
    except StorageError as e:
        logger.error(f"레시피 목록 조회 실패: error={str(e)}")
        raise InternalServerErrorException("레시피 목록 조회 중 오류가 발생했습니다.")

    logger.debug(f"레시피 목록 조회 성공: 개수={len(recipes)}")
    return recipes


@router.get("/{recipe_id}", response_model=Recipe)
async def get_recipe(
        recipe_id: int = Path(..., description="레시피 ID"),
        repository: RecipeRepository = Depends(get_recipe_repository)
):
    """
    레시피 상세 정보 + 재료 리스트 조회
    """
    logger.info(f"레시피 상세 조회 API 호출: recipe_id={recipe_id}")

    try:
        recipe = await repository.get(recipe_id)
    except NotFoundError:
        logger.warning(f"레시피를 찾을 수 없음: recipe_id={recipe_id}")
        raise NotFoundException("레시피")
    except StorageError as e:
        logger.error(f"레시피 상세 조회 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException("레시피 조회 중 오류가 발생했습니다.")

    return recipe


@router.post("", response_model=Recipe, status_code=status.HTTP_201_CREATED)
async def create_recipe(
        draft: RecipeDraft,
        repository: RecipeRepository = Depends(get_recipe_repository)
):
    """
    레시피 등록 (재료 목록 포함, 원자적으로 생성)
    """
    logger.info(f"레시피 등록 API 호출: name={draft.name}, 재료 개수={len(draft.ingredients)}")

    try:
        recipe = await repository.create(draft)
    except ValidationError as e:
        logger.warning(f"레시피 등록 입력 검증 실패: field={e.field}, message={e.message}")
        raise BadRequestException(e.message)
    except StorageError as e:
        logger.error(f"레시피 등록 실패: error={str(e)}")
        raise InternalServerErrorException("레시피 등록 중 오류가 발생했습니다.")

    logger.info(f"레시피 등록 완료: recipe_id={recipe.recipe_id}")
    return recipe


@router.put("/{recipe_id}", response_model=Recipe)
async def update_recipe(
        draft: RecipeDraft,
        recipe_id: int = Path(..., description="레시피 ID"),
        repository: RecipeRepository = Depends(get_recipe_repository)
):
    """
    레시피 전체 수정
    - 재료 목록은 통째로 교체 (재료 ID 는 새로 발급됨)
    """
    logger.info(f"레시피 수정 API 호출: recipe_id={recipe_id}, 재료 개수={len(draft.ingredients)}")

    try:
        recipe = await repository.update(recipe_id, draft)
    except ValidationError as e:
        logger.warning(f"레시피 수정 입력 검증 실패: recipe_id={recipe_id}, field={e.field}, message={e.message}")
        raise BadRequestException(e.message)
    except NotFoundError:
        logger.warning(f"수정할 레시피를 찾을 수 없음: recipe_id={recipe_id}")
        raise NotFoundException("레시피")
    except StorageError as e:
        logger.error(f"레시피 수정 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException("레시피 수정 중 오류가 발생했습니다.")

    logger.info(f"레시피 수정 완료: recipe_id={recipe_id}")
    return recipe


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
        recipe_id: int = Path(..., description="레시피 ID"),
        repository: RecipeRepository = Depends(get_recipe_repository)
):
    """
    레시피 삭제 (소속 재료까지 함께 삭제)
    """
    logger.info(f"레시피 삭제 API 호출: recipe_id={recipe_id}")

    try:
        await repository.delete(recipe_id)
    except NotFoundError:
        logger.warning(f"삭제할 레시피를 찾을 수 없음: recipe_id={recipe_id}")
        raise NotFoundException("레시피")
    except StorageError as e:
        logger.error(f"레시피 삭제 실패: recipe_id={recipe_id}, error={str(e)}")
        raise InternalServerErrorException("레시피 삭제 중 오류가 발생했습니다.")

    logger.info(f"레시피 삭제 완료: recipe_id={recipe_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
