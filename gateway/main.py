"""
gateway/main.py
---------------
Gecko Recipes API 진입점.
레시피 서비스 router 를 등록하고 DB 엔진/저장소 생명주기를 관리한다.
- CORS, 요청 검증 예외처리, 로깅 등 공통 설정도 이곳에서 적용
- 엔진/저장소는 전역 변수가 아닌 app.state 에 보관
"""
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from common.config import Settings, get_cli_settings, get_settings
from common.database.postgres_recipe import create_recipe_engine, create_session_factory, init_recipe_schema
from common.logger import get_logger
from services.recipe.crud.recipe_crud import SqlRecipeRepository
from services.recipe.crud.recipe_repository import RecipeRepository
from services.recipe.routers.recipe_router import router as recipe_router

def create_app(settings: Optional[Settings] = None, repository: Optional[RecipeRepository] = None) -> FastAPI:
    """
    FastAPI 애플리케이션 생성
    - repository 를 넘기면 그대로 사용 (테스트용 메모리 저장소 등)
    - 넘기지 않으면 시작 시 settings.database_url 로 SQL 저장소 생성, 종료 시 엔진 정리
    """
    settings = settings or get_settings()
    logger = get_logger("gateway", level=settings.log_level, enable_json_format=settings.log_json_format)
    logger.info("API Gateway 초기화 시작...")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = None
        if app.state.recipe_repository is None:
            logger.info("레시피 DB 엔진 생성 중...")
            engine = create_recipe_engine(settings)
            if settings.db_create_schema:
                await init_recipe_schema(engine)
            app.state.recipe_repository = SqlRecipeRepository(create_session_factory(engine))
            logger.info("레시피 저장소 초기화 완료")
        try:
            yield
        finally:
            if engine is not None:
                await engine.dispose()
                app.state.recipe_repository = None
                logger.info("레시피 DB 엔진 종료됨")

    logger.info(f"FastAPI 애플리케이션 생성: 제목={settings.app_name}, 디버그={settings.debug}")
    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.state.recipe_repository = repository

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info(f"CORS 미들웨어 설정 완료: origins={settings.cors_origins}")

    # 요청 바디 검증 실패(형식 오류, 알 수 없는 enum 라벨)는 400 으로 응답
    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
        logger.warning(f"요청 검증 실패: path={request.url.path}, errors={errors}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "요청 형식이 올바르지 않습니다.", "errors": errors},
        )

    @app.get("/health")
    async def health_check():
        """
        레시피 서비스 헬스체크
        """
        return {
            "status": "healthy",
            "service": "recipe",
            "message": "레시피 서비스가 정상적으로 작동 중입니다."
        }

    logger.debug("레시피 라우터 포함 중...")
    app.include_router(recipe_router)
    logger.info("레시피 라우터 포함 완료")

    return app

def main() -> None:
    """커맨드라인 실행 (gecko-recipes --database_url ... --host ... --port ...)"""
    settings = get_cli_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())

if __name__ == "__main__":
    main()
