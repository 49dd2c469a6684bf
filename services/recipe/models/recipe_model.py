"""
레시피 및 재료(recipe, ingredient) 테이블의 ORM 모델 정의 모듈
- meal_type / quantity_type 은 DB enum 타입, 라벨은 도메인 enum 값과 1:1 매핑
- 재료는 레시피에 종속 (FK NOT NULL, ON DELETE CASCADE)
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Double,
    Enum,
    ForeignKey,
    Identity,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from common.database.base_postgres import PostgresBase
from services.recipe.schemas.recipe_schema import MealType, QuantityType


def _enum_values(enum_cls):
    """enum 멤버 이름이 아닌 값(라벨)을 DB 에 저장"""
    return [member.value for member in enum_cls]


meal_type_enum = Enum(
    MealType,
    name="meal_type",
    values_callable=_enum_values,
    create_constraint=True,
    validate_strings=True,
)

quantity_type_enum = Enum(
    QuantityType,
    name="quantity_type",
    values_callable=_enum_values,
    create_constraint=True,
    validate_strings=True,
)


class Recipe(PostgresBase):
    """recipe 테이블의 ORM 모델"""

    __tablename__ = "recipe"
    __table_args__ = (
        CheckConstraint("name <> ''", name="ck_recipe_name_not_empty"),
        CheckConstraint("description <> ''", name="ck_recipe_description_not_empty"),
        # SQLite 는 Identity 를 무시하므로 삭제된 ID 재사용 방지
        {"sqlite_autoincrement": True},
    )

    recipe_id = Column(Integer, Identity(always=True), primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    cooking_time_secs = Column(BigInteger, nullable=True)
    meal_type = Column(meal_type_enum, nullable=False)

    # 재료(ingredient)와 1:N 관계, 항상 순서대로 로딩
    ingredients = relationship(
        "Ingredient",
        back_populates="recipe",
        order_by="Ingredient.ingredient_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )


class Ingredient(PostgresBase):
    """ingredient 테이블의 ORM 모델"""

    __tablename__ = "ingredient"
    __table_args__ = (
        CheckConstraint("name <> ''", name="ck_ingredient_name_not_empty"),
        UniqueConstraint("recipe_id", "ingredient_order", name="uq_ingredient_recipe_order"),
        {"sqlite_autoincrement": True},
    )

    ingredient_id = Column(Integer, Identity(always=True), primary_key=True)
    recipe_id = Column(
        Integer,
        ForeignKey("recipe.recipe_id", ondelete="CASCADE"),
        nullable=False,
    )
    ingredient_order = Column(Integer, nullable=False)
    name = Column(Text, nullable=False)
    quantity = Column(Double, nullable=False)
    quantity_type = Column(quantity_type_enum, nullable=False)

    recipe = relationship("Recipe", back_populates="ingredients", lazy="raise")
