"""create recipe and ingredient tables

Revision ID: 20250825_initial_recipe_schema
Revises:
Create Date: 2025-08-25 17:53:34.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20250825_initial_recipe_schema'
down_revision = None
branch_labels = None
depends_on = None


MEAL_TYPES = ('Breakfast', 'Lunch', 'Dinner')
QUANTITY_TYPES = ('Count', 'Kilo', 'Gram', 'Liter', 'Milliliter')


def upgrade():
    # 레시피 테이블 (meal_type enum 타입도 함께 생성)
    op.create_table('recipe',
        sa.Column('recipe_id', sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('cooking_time_secs', sa.BigInteger(), nullable=True),
        sa.Column('meal_type', sa.Enum(*MEAL_TYPES, name='meal_type', create_constraint=True), nullable=False),
        sa.PrimaryKeyConstraint('recipe_id'),
        sa.CheckConstraint("name <> ''", name='ck_recipe_name_not_empty'),
        sa.CheckConstraint("description <> ''", name='ck_recipe_description_not_empty'),
        sqlite_autoincrement=True,
    )

    # 재료 테이블 (레시피 삭제 시 함께 삭제)
    op.create_table('ingredient',
        sa.Column('ingredient_id', sa.Integer(), sa.Identity(always=True), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('ingredient_order', sa.Integer(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('quantity', sa.Double(), nullable=False),
        sa.Column('quantity_type', sa.Enum(*QUANTITY_TYPES, name='quantity_type', create_constraint=True), nullable=False),
        sa.PrimaryKeyConstraint('ingredient_id'),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipe.recipe_id'], ondelete='CASCADE'),
        sa.CheckConstraint("name <> ''", name='ck_ingredient_name_not_empty'),
        sa.UniqueConstraint('recipe_id', 'ingredient_order', name='uq_ingredient_recipe_order'),
        sqlite_autoincrement=True,
    )


def downgrade():
    op.drop_table('ingredient')
    op.drop_table('recipe')

    # enum 타입 삭제 (PostgreSQL 전용, 그 외 DB 는 무시됨)
    bind = op.get_bind()
    sa.Enum(name='quantity_type').drop(bind, checkfirst=True)
    sa.Enum(name='meal_type').drop(bind, checkfirst=True)
