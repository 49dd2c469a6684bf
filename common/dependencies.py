from fastapi import Request

from common.errors import InternalServerErrorException
from common.logger import get_logger_from_env
from services.recipe.crud.recipe_repository import RecipeRepository

logger = get_logger_from_env("dependencies")

def get_recipe_repository(request: Request) -> RecipeRepository:
    """애플리케이션 시작 시 생성된 레시피 저장소 반환 (FastAPI DI 용)"""
    repository = getattr(request.app.state, "recipe_repository", None)
    if repository is None:
        logger.error("레시피 저장소가 초기화되지 않음")
        raise InternalServerErrorException()
    return repository
