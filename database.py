"""
데이터베이스 연결 설정

SQLAlchemy 엔진, 세션 팩토리, 선언적 Base를 제공합니다.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.config import DATABASE_URL

# SQLite는 FastAPI 워커 스레드 간 연결 공유 허용 필요
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI 의존성: 요청 단위 DB 세션"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
