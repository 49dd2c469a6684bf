"""
레시피 도메인 모델 (Pydantic)
- 저장소 구현과 무관한 Recipe / Ingredient 표현
- HTTP 요청/응답 바디로도 그대로 사용
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class MealType(str, Enum):
    """식사 유형 (닫힌 집합)"""

    breakfast = "Breakfast"
    lunch = "Lunch"
    dinner = "Dinner"


class QuantityType(str, Enum):
    """재료 수량 단위 (닫힌 집합)"""

    count = "Count"
    kilo = "Kilo"
    gram = "Gram"
    liter = "Liter"
    milliliter = "Milliliter"


class IngredientDraft(BaseModel):
    """재료 입력 (ID/순서 없음, 입력 순서가 곧 재료 순서)"""

    name: str = Field(..., description="재료명")
    quantity: float = Field(..., description="수량 (0 이상)")
    quantity_type: QuantityType = Field(..., description="수량 단위")


class RecipeDraft(BaseModel):
    """레시피 생성/수정 요청 바디 (ID 없음)"""

    name: str = Field(..., description="레시피명")
    description: Optional[str] = Field(None, description="설명 (있으면 빈 문자열 불가)")
    cooking_time: Optional[int] = Field(None, description="조리 시간(초)")
    meal_type: MealType = Field(..., description="식사 유형")
    ingredients: List[IngredientDraft] = Field(default_factory=list)


class Ingredient(IngredientDraft):
    """저장된 재료"""

    ingredient_id: int
    ingredient_order: int

    class Config:
        from_attributes = True


class Recipe(BaseModel):
    """저장된 레시피 (재료는 ingredient_order 오름차순)"""

    recipe_id: int
    name: str
    description: Optional[str] = None
    cooking_time: Optional[int] = None
    meal_type: MealType
    ingredients: List[Ingredient] = Field(default_factory=list)

    class Config:
        from_attributes = True
