"""
레시피 저장소 메모리 구현
- DB 없이 라우터/계약 단위 테스트용
- 각 연산 내부에 await 지점이 없어서 이벤트 루프 상에서 원자적으로 실행
"""

from typing import Dict, List

from common.errors import NotFoundError
from common.logger import get_logger_from_env
from services.recipe.crud.recipe_repository import RecipeRepository
from services.recipe.schemas.recipe_schema import Ingredient, Recipe, RecipeDraft

logger = get_logger_from_env("recipe_memory_crud")


class InMemoryRecipeRepository(RecipeRepository):
    """dict 기반 레시피 저장소"""

    def __init__(self) -> None:
        self._recipes: Dict[int, Recipe] = {}
        self._next_recipe_id = 1
        self._next_ingredient_id = 1

    def _materialize(self, recipe_id: int, draft: RecipeDraft) -> Recipe:
        ingredients = []
        for idx, item in enumerate(draft.ingredients):
            ingredients.append(
                Ingredient(
                    ingredient_id=self._next_ingredient_id,
                    ingredient_order=idx,
                    name=item.name,
                    quantity=item.quantity,
                    quantity_type=item.quantity_type,
                )
            )
            self._next_ingredient_id += 1

        return Recipe(
            recipe_id=recipe_id,
            name=draft.name,
            description=draft.description,
            cooking_time=draft.cooking_time,
            meal_type=draft.meal_type,
            ingredients=ingredients,
        )

    async def _create(self, draft: RecipeDraft) -> Recipe:
        recipe = self._materialize(self._next_recipe_id, draft)
        self._next_recipe_id += 1
        self._recipes[recipe.recipe_id] = recipe
        logger.debug(f"메모리 레시피 생성: recipe_id={recipe.recipe_id}")
        return recipe.model_copy(deep=True)

    async def _get(self, recipe_id: int) -> Recipe:
        recipe = self._recipes.get(recipe_id)
        if recipe is None:
            raise NotFoundError(recipe_id)
        return recipe.model_copy(deep=True)

    async def _list(self) -> List[Recipe]:
        return [self._recipes[key].model_copy(deep=True) for key in sorted(self._recipes)]

    async def _update(self, recipe_id: int, draft: RecipeDraft) -> Recipe:
        if recipe_id not in self._recipes:
            raise NotFoundError(recipe_id)
        recipe = self._materialize(recipe_id, draft)
        self._recipes[recipe_id] = recipe
        logger.debug(f"메모리 레시피 수정: recipe_id={recipe_id}")
        return recipe.model_copy(deep=True)

    async def _delete(self, recipe_id: int) -> None:
        if self._recipes.pop(recipe_id, None) is None:
            raise NotFoundError(recipe_id)
        logger.debug(f"메모리 레시피 삭제: recipe_id={recipe_id}")
