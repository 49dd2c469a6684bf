"""
레시피 저장소 계약 (Repository Contract)
- 저장소 구현(SQL, 메모리)과 무관하게 5개 연산(create/get/list/update/delete)을 정의
- 입력 검증은 계약의 공개 메서드에서 호출당 정확히 한 번 수행
- 구현체는 _create / _get / _list / _update / _delete 만 구현
"""

import math
from abc import ABC, abstractmethod
from typing import List

from common.errors import ValidationError
from services.recipe.schemas.recipe_schema import MealType, QuantityType, Recipe, RecipeDraft

# cooking_time_secs 컬럼(BIGINT) 상한
MAX_COOKING_TIME_SECS = 2**63 - 1


def _is_blank(value: str) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_recipe_draft(draft: RecipeDraft) -> None:
    """
    레시피 입력 검증, 위반 시 ValidationError (field 에 위반 위치 기록)
    - name: 공백 제외 비어있으면 안 됨
    - description: None 이거나 비어있지 않은 문자열
    - cooking_time: None 이거나 0 이상 MAX_COOKING_TIME_SECS 이하 정수(초)
    - 재료 name 비어있지 않음, quantity 는 유한한 0 이상 숫자
    - meal_type / quantity_type 은 닫힌 enum 멤버
    """
    if _is_blank(draft.name):
        raise ValidationError("레시피 이름은 비어 있을 수 없습니다.", field="name")

    if draft.description is not None and _is_blank(draft.description):
        raise ValidationError("레시피 설명은 비어 있을 수 없습니다.", field="description")

    if draft.cooking_time is not None:
        if (isinstance(draft.cooking_time, bool) or not isinstance(draft.cooking_time, int)
                or not 0 <= draft.cooking_time <= MAX_COOKING_TIME_SECS):
            raise ValidationError("조리 시간은 범위 내의 0 이상 정수(초)여야 합니다.", field="cooking_time")

    if not isinstance(draft.meal_type, MealType):
        raise ValidationError("알 수 없는 식사 유형입니다.", field="meal_type")

    for idx, ingredient in enumerate(draft.ingredients):
        if _is_blank(ingredient.name):
            raise ValidationError("재료 이름은 비어 있을 수 없습니다.", field=f"ingredients[{idx}].name")
        if not math.isfinite(ingredient.quantity) or ingredient.quantity < 0:
            raise ValidationError("재료 수량은 0 이상이어야 합니다.", field=f"ingredients[{idx}].quantity")
        if not isinstance(ingredient.quantity_type, QuantityType):
            raise ValidationError("알 수 없는 수량 단위입니다.", field=f"ingredients[{idx}].quantity_type")


class RecipeRepository(ABC):
    """레시피 저장소 추상 계약"""

    async def create(self, draft: RecipeDraft) -> Recipe:
        """레시피와 재료 목록을 하나의 원자적 연산으로 생성"""
        validate_recipe_draft(draft)
        return await self._create(draft)

    async def get(self, recipe_id: int) -> Recipe:
        """레시피 단건 조회, 없으면 NotFoundError"""
        return await self._get(recipe_id)

    async def list(self) -> List[Recipe]:
        """전체 레시피 조회 (recipe_id 오름차순)"""
        return await self._list()

    async def update(self, recipe_id: int, draft: RecipeDraft) -> Recipe:
        """
        레시피 전체 교체
        - 재료는 삭제 후 재삽입하므로 ingredient_id 는 유지되지 않음
        """
        validate_recipe_draft(draft)
        return await self._update(recipe_id, draft)

    async def delete(self, recipe_id: int) -> None:
        """레시피와 소속 재료 삭제, 없으면 NotFoundError"""
        await self._delete(recipe_id)

    @abstractmethod
    async def _create(self, draft: RecipeDraft) -> Recipe:
        ...

    @abstractmethod
    async def _get(self, recipe_id: int) -> Recipe:
        ...

    @abstractmethod
    async def _list(self) -> List[Recipe]:
        ...

    @abstractmethod
    async def _update(self, recipe_id: int, draft: RecipeDraft) -> Recipe:
        ...

    @abstractmethod
    async def _delete(self, recipe_id: int) -> None:
        ...
