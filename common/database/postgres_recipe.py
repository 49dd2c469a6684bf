"""
레시피 DB 엔진 및 세션 팩토리 생성 모듈
- 비동기 SQLAlchemy (AsyncEngine, AsyncSession)
- 모듈 전역 엔진 없이 애플리케이션 시작 시 명시적으로 생성해서 주입
- PostgreSQL(asyncpg) 운영, SQLite(aiosqlite) 개발/테스트 지원
"""
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from common.config import Settings
from common.database.base_postgres import PostgresBase
from common.logger import get_logger_from_env

logger = get_logger_from_env("postgres_recipe")

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite 는 기본적으로 FK 제약조건이 꺼져 있으므로 커넥션마다 활성화"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

def create_recipe_engine(settings: Settings) -> AsyncEngine:
    """
    설정값으로 레시피 DB 비동기 엔진 생성
    - asyncpg: 접속/쿼리 타임아웃을 connect_args 로 전달
    - sqlite 메모리 DB: 모든 세션이 같은 커넥션을 공유하도록 StaticPool 사용
    """
    url = make_url(settings.database_url.get_secret_value())
    engine_kwargs = {"echo": settings.debug}

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_pre_ping"] = True
        engine_kwargs["pool_timeout"] = settings.db_pool_timeout
        if url.get_driver_name() == "asyncpg":
            engine_kwargs["connect_args"] = {
                "timeout": settings.db_connect_timeout,
                "command_timeout": settings.db_command_timeout,
            }

    engine = create_async_engine(url, **engine_kwargs)

    if url.get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    # 비밀번호는 마스킹해서 기록
    logger.info(f"레시피 DB 엔진 생성됨, URL: {url.render_as_string(hide_password=True)}")
    logger.info(f"디버그 모드: {settings.debug}")
    return engine

def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """레시피 DB 비동기 세션 팩토리 생성"""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

async def init_recipe_schema(engine: AsyncEngine) -> None:
    """
    ORM 메타데이터 기준으로 테이블/enum 타입 생성 (개발/테스트용)
    - 운영 환경은 alembic 마이그레이션 사용
    """
    # 모델 모듈을 import 해야 메타데이터에 테이블이 등록됨
    from services.recipe.models import recipe_model  # noqa: F401

    logger.info("레시피 스키마 생성 시작")
    async with engine.begin() as conn:
        await conn.run_sync(PostgresBase.metadata.create_all)
    logger.info("레시피 스키마 생성 완료")
