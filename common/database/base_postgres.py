"""
PostgreSQL ORM Base 클래스
- 모든 레시피 서비스 ORM 모델이 상속 (alembic 메타데이터 대상)
"""
from sqlalchemy.orm import declarative_base

PostgresBase = declarative_base()
