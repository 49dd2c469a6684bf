import pytest

from common.errors import NotFoundError, ValidationError
from services.recipe.schemas.recipe_schema import IngredientDraft, MealType, QuantityType, RecipeDraft
from tests.factories import pancakes_draft, stew_draft


def ingredient_view(recipe):
    return [(i.name, i.quantity, i.quantity_type) for i in recipe.ingredients]


@pytest.mark.asyncio
async def test_create_then_get_round_trip(repository) -> None:
    created = await repository.create(stew_draft())
    got = await repository.get(created.recipe_id)

    assert got == created
    assert got.name == "Beef stew"
    assert got.description == "Slow cooked, serves four"
    assert got.cooking_time == 7200
    assert got.meal_type is MealType.dinner
    assert [i.name for i in got.ingredients] == ["Beef", "Carrot", "Stock", "Onion"]
    assert [i.ingredient_order for i in got.ingredients] == [0, 1, 2, 3]


@pytest.mark.asyncio
async def test_create_assigns_identities(repository) -> None:
    created = await repository.create(pancakes_draft())

    assert created.recipe_id is not None
    ids = [i.ingredient_id for i in created.ingredients]
    assert len(set(ids)) == 2
    assert ingredient_view(created) == [
        ("Flour", 2.0, QuantityType.kilo),
        ("Milk", 300.0, QuantityType.milliliter),
    ]


@pytest.mark.asyncio
async def test_create_without_ingredients(repository) -> None:
    created = await repository.create(RecipeDraft(name="Toast", meal_type=MealType.breakfast))
    got = await repository.get(created.recipe_id)

    assert got.ingredients == []
    assert got.description is None
    assert got.cooking_time is None


@pytest.mark.asyncio
async def test_list_contains_created_and_not_deleted(repository) -> None:
    assert await repository.list() == []

    first = await repository.create(pancakes_draft())
    second = await repository.create(stew_draft())
    third = await repository.create(RecipeDraft(name="Salad", meal_type=MealType.lunch))

    await repository.delete(second.recipe_id)

    listed = await repository.list()
    assert [r.recipe_id for r in listed] == [first.recipe_id, third.recipe_id]
    assert listed[0] == first


@pytest.mark.asyncio
async def test_update_replaces_ingredient_list(repository) -> None:
    created = await repository.create(stew_draft())
    old_ids = {i.ingredient_id for i in created.ingredients}

    draft = RecipeDraft(
        name="Quick stew",
        meal_type=MealType.lunch,
        ingredients=[
            IngredientDraft(name="Onion", quantity=1.0, quantity_type=QuantityType.count),
            IngredientDraft(name="Beef", quantity=0.5, quantity_type=QuantityType.kilo),
        ],
    )
    updated = await repository.update(created.recipe_id, draft)
    got = await repository.get(created.recipe_id)

    assert updated == got
    assert got.recipe_id == created.recipe_id
    assert got.name == "Quick stew"
    assert got.description is None
    assert got.cooking_time is None
    assert got.meal_type is MealType.lunch
    assert ingredient_view(got) == [
        ("Onion", 1.0, QuantityType.count),
        ("Beef", 0.5, QuantityType.kilo),
    ]
    assert [i.ingredient_order for i in got.ingredients] == [0, 1]
    assert old_ids.isdisjoint({i.ingredient_id for i in got.ingredients})


@pytest.mark.asyncio
async def test_update_leaves_other_recipes_untouched(repository) -> None:
    pancakes = await repository.create(pancakes_draft())
    stew = await repository.create(stew_draft())

    await repository.update(stew.recipe_id, RecipeDraft(name="Empty stew", meal_type=MealType.dinner))

    assert await repository.get(pancakes.recipe_id) == pancakes
    assert (await repository.get(stew.recipe_id)).ingredients == []


@pytest.mark.asyncio
async def test_delete_then_get_fails(repository) -> None:
    created = await repository.create(pancakes_draft())

    await repository.delete(created.recipe_id)

    with pytest.raises(NotFoundError):
        await repository.get(created.recipe_id)


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["get", "update", "delete"])
async def test_missing_recipe_raises_not_found(repository, operation: str) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        if operation == "get":
            await repository.get(404)
        elif operation == "update":
            await repository.update(404, pancakes_draft())
        else:
            await repository.delete(404)

    assert exc_info.value.recipe_id == 404


@pytest.mark.asyncio
async def test_delete_missing_has_no_side_effect(repository) -> None:
    created = await repository.create(pancakes_draft())

    with pytest.raises(NotFoundError):
        await repository.delete(created.recipe_id + 100)

    assert await repository.list() == [created]


@pytest.mark.asyncio
async def test_create_with_empty_name_creates_nothing(repository) -> None:
    await repository.create(pancakes_draft())

    with pytest.raises(ValidationError) as exc_info:
        await repository.create(RecipeDraft(name="", meal_type=MealType.lunch))

    assert exc_info.value.field == "name"
    assert len(await repository.list()) == 1


@pytest.mark.asyncio
async def test_invalid_update_keeps_previous_state(repository) -> None:
    created = await repository.create(pancakes_draft())
    draft = pancakes_draft()
    draft.ingredients[1].quantity = -1.0

    with pytest.raises(ValidationError) as exc_info:
        await repository.update(created.recipe_id, draft)

    assert exc_info.value.field == "ingredients[1].quantity"
    assert await repository.get(created.recipe_id) == created


@pytest.mark.asyncio
async def test_deleted_recipe_id_is_not_reused(repository) -> None:
    deleted = await repository.create(pancakes_draft())
    await repository.delete(deleted.recipe_id)

    created = await repository.create(pancakes_draft())

    assert created.recipe_id != deleted.recipe_id
    assert {i.ingredient_id for i in created.ingredients}.isdisjoint(
        {i.ingredient_id for i in deleted.ingredients}
    )
    with pytest.raises(NotFoundError):
        await repository.get(deleted.recipe_id)


@pytest.mark.asyncio
@pytest.mark.parametrize("recipe_id", [0, -1, 2**31, 2**63], ids=["zero", "negative", "int32-overflow", "int64-overflow"])
@pytest.mark.parametrize("operation", ["get", "update", "delete"])
async def test_out_of_range_id_raises_not_found(repository, operation: str, recipe_id: int) -> None:
    await repository.create(pancakes_draft())

    with pytest.raises(NotFoundError) as exc_info:
        if operation == "get":
            await repository.get(recipe_id)
        elif operation == "update":
            await repository.update(recipe_id, pancakes_draft())
        else:
            await repository.delete(recipe_id)

    assert exc_info.value.recipe_id == recipe_id
    assert len(await repository.list()) == 1


@pytest.mark.asyncio
async def test_cooking_time_beyond_bigint_is_rejected(repository) -> None:
    draft = pancakes_draft()
    draft.cooking_time = 2**63

    with pytest.raises(ValidationError) as exc_info:
        await repository.create(draft)

    assert exc_info.value.field == "cooking_time"
    assert await repository.list() == []


@pytest.mark.asyncio
async def test_largest_cooking_time_round_trips(repository) -> None:
    draft = pancakes_draft()
    draft.cooking_time = 2**63 - 1

    created = await repository.create(draft)

    assert (await repository.get(created.recipe_id)).cooking_time == 2**63 - 1
