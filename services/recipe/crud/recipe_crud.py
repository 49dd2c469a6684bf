"""
레시피 저장소 SQLAlchemy 구현 (PostgreSQL / SQLite)
- 연산 하나당 트랜잭션 하나 (async with session.begin())
- 예외 발생 시 트랜잭션 전체 롤백 후 StorageError 로 분류
- 재료 순서(ingredient_order)는 입력 순서대로 0..n-1 부여
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from common.errors import NotFoundError, StorageError
from common.logger import get_logger_from_env, log_with_context
from services.recipe.crud.recipe_repository import RecipeRepository
from services.recipe.models.recipe_model import Ingredient as IngredientModel
from services.recipe.models.recipe_model import Recipe as RecipeModel
from services.recipe.schemas.recipe_schema import (
    Ingredient,
    IngredientDraft,
    MealType,
    QuantityType,
    Recipe,
    RecipeDraft,
)

logger = get_logger_from_env("recipe_crud")

# recipe_id 컬럼(INTEGER) 범위, 밖의 ID 는 조회 없이 존재하지 않는 것으로 처리
MIN_RECIPE_ID = 1
MAX_RECIPE_ID = 2**31 - 1


def _to_domain(row: RecipeModel, ingredients: Sequence[IngredientModel]) -> Recipe:
    """
    ORM 행 -> 도메인 Recipe 변환
    - enum 라벨은 여기서 다시 검증 (DB 인코딩을 그대로 신뢰하지 않음)
    """
    return Recipe(
        recipe_id=row.recipe_id,
        name=row.name,
        description=row.description,
        cooking_time=row.cooking_time_secs,
        meal_type=MealType(row.meal_type),
        ingredients=[
            Ingredient(
                ingredient_id=ing.ingredient_id,
                ingredient_order=ing.ingredient_order,
                name=ing.name,
                quantity=ing.quantity,
                quantity_type=QuantityType(ing.quantity_type),
            )
            for ing in sorted(ingredients, key=lambda i: i.ingredient_order)
        ],
    )


def _ensure_storable_id(recipe_id: int) -> None:
    """INTEGER 범위 밖의 ID 는 저장될 수 없으므로 바로 NotFoundError"""
    if not MIN_RECIPE_ID <= recipe_id <= MAX_RECIPE_ID:
        logger.warning(f"범위 밖의 레시피 ID 요청: recipe_id={recipe_id}")
        raise NotFoundError(recipe_id)


def _build_ingredients(recipe_id: int, drafts: Sequence[IngredientDraft]) -> List[IngredientModel]:
    """재료 입력 목록을 ORM 행으로 변환 (순서 = 입력 인덱스)"""
    return [
        IngredientModel(
            recipe_id=recipe_id,
            ingredient_order=idx,
            name=draft.name,
            quantity=draft.quantity,
            quantity_type=draft.quantity_type,
        )
        for idx, draft in enumerate(drafts)
    ]


class SqlRecipeRepository(RecipeRepository):
    """
    SQLAlchemy 비동기 세션 기반 레시피 저장소
    - 세션 팩토리는 애플리케이션 시작 시 생성해서 주입
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str, **context) -> AsyncIterator[AsyncSession]:
        """
        트랜잭션 범위 세션 제공
        - 블록이 정상 종료되면 커밋, 예외/취소 시 롤백
        - 드라이버 예외는 StorageError 로 변환 (원본은 __cause__ 로 보존)
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        except (NotFoundError, StorageError):
            raise
        except (SQLAlchemyError, OSError, OverflowError, asyncio.TimeoutError) as e:
            log_with_context(logger, "ERROR", f"레시피 {operation} DB 오류: {type(e).__name__}", operation=operation, **context)
            raise StorageError(f"레시피 {operation} 중 DB 오류가 발생했습니다.") from e
        except (LookupError, ValueError) as e:
            # DB 에 닫힌 enum 집합 밖의 라벨이 저장되어 있는 경우
            log_with_context(logger, "ERROR", f"레시피 {operation} 데이터 변환 실패: {e}", operation=operation, **context)
            raise StorageError(f"레시피 {operation} 중 저장된 데이터가 올바르지 않습니다.") from e

    async def _create(self, draft: RecipeDraft) -> Recipe:
        logger.debug(f"레시피 생성 시작: name={draft.name}, 재료 개수={len(draft.ingredients)}")

        async with self._transaction("생성", name=draft.name) as session:
            row = RecipeModel(
                name=draft.name,
                description=draft.description,
                cooking_time_secs=draft.cooking_time,
                meal_type=draft.meal_type,
            )
            session.add(row)
            # recipe_id 확보
            await session.flush()

            ingredients = _build_ingredients(row.recipe_id, draft.ingredients)
            session.add_all(ingredients)
            await session.flush()

            recipe = _to_domain(row, ingredients)

        logger.info(f"레시피 생성 완료: recipe_id={recipe.recipe_id}, 재료 개수={len(recipe.ingredients)}")
        return recipe

    async def _get(self, recipe_id: int) -> Recipe:
        logger.debug(f"레시피 조회 시작: recipe_id={recipe_id}")
        _ensure_storable_id(recipe_id)

        stmt = (
            select(RecipeModel)
            .options(selectinload(RecipeModel.ingredients))
            .where(RecipeModel.recipe_id == recipe_id)
        )
        async with self._transaction("조회", recipe_id=recipe_id) as session:
            row = (await session.execute(stmt)).scalar_one_or_none()
            if row is None:
                logger.warning(f"레시피를 찾을 수 없음: recipe_id={recipe_id}")
                raise NotFoundError(recipe_id)
            recipe = _to_domain(row, row.ingredients)

        logger.debug(f"레시피 조회 완료: recipe_id={recipe_id}, 재료 개수={len(recipe.ingredients)}")
        return recipe

    async def _list(self) -> List[Recipe]:
        logger.debug("레시피 목록 조회 시작")

        stmt = (
            select(RecipeModel)
            .options(selectinload(RecipeModel.ingredients))
            .order_by(RecipeModel.recipe_id)
        )
        async with self._transaction("목록 조회") as session:
            rows = (await session.execute(stmt)).scalars().all()
            recipes = [_to_domain(row, row.ingredients) for row in rows]

        logger.debug(f"레시피 목록 조회 완료: 개수={len(recipes)}")
        return recipes

    async def _update(self, recipe_id: int, draft: RecipeDraft) -> Recipe:
        logger.debug(f"레시피 수정 시작: recipe_id={recipe_id}, 재료 개수={len(draft.ingredients)}")
        _ensure_storable_id(recipe_id)

        async with self._transaction("수정", recipe_id=recipe_id) as session:
            # 행 잠금 후 존재 확인
            stmt = select(RecipeModel).where(RecipeModel.recipe_id == recipe_id).with_for_update()
            row = (await session.execute(stmt)).scalar_one_or_none()
            if row is None:
                logger.warning(f"수정할 레시피를 찾을 수 없음: recipe_id={recipe_id}")
                raise NotFoundError(recipe_id)

            row.name = draft.name
            row.description = draft.description
            row.cooking_time_secs = draft.cooking_time
            row.meal_type = draft.meal_type

            # 기존 재료 전부 삭제 후 재삽입
            await session.execute(delete(IngredientModel).where(IngredientModel.recipe_id == recipe_id))

            ingredients = _build_ingredients(recipe_id, draft.ingredients)
            session.add_all(ingredients)
            await session.flush()

            recipe = _to_domain(row, ingredients)

        logger.info(f"레시피 수정 완료: recipe_id={recipe_id}, 재료 개수={len(recipe.ingredients)}")
        return recipe

    async def _delete(self, recipe_id: int) -> None:
        logger.debug(f"레시피 삭제 시작: recipe_id={recipe_id}")
        _ensure_storable_id(recipe_id)

        async with self._transaction("삭제", recipe_id=recipe_id) as session:
            # 재료 먼저 삭제 후 레시피 삭제
            await session.execute(delete(IngredientModel).where(IngredientModel.recipe_id == recipe_id))

            result = await session.execute(delete(RecipeModel).where(RecipeModel.recipe_id == recipe_id))
            if result.rowcount == 0:
                # 예외로 빠져나가면서 재료 삭제까지 롤백
                logger.warning(f"삭제할 레시피를 찾을 수 없음: recipe_id={recipe_id}")
                raise NotFoundError(recipe_id)

        logger.info(f"레시피 삭제 완료: recipe_id={recipe_id}")
