"""
데이터베이스 초기화 스크립트
BRD 편집기에 필요한 테이블들을 생성합니다.
"""
import sys
from pathlib import Path

# 프로젝트 루트를 Python path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from database import engine, Base
from app.logging_config import get_logger, setup_logging_from_env
import models  # 모든 모델을 임포트하여 Base.metadata에 등록

logger = get_logger("db_init")

SAMPLE_BRD = """# Sample BRD

## Purpose
Describe the business problem this project solves.

## Scope
- In scope: order intake
- Out of scope: billing

## Requirements
### Functional
The system shall accept orders through the web portal.

### Non-Functional
Pages load in under two seconds.
"""


def init_database(drop_existing: bool = False):
    """
    데이터베이스 테이블 초기화
    
    Args:
        drop_existing: 기존 테이블 삭제 여부
    """
    try:
        if drop_existing:
            logger.warning("Dropping existing tables...")
            Base.metadata.drop_all(bind=engine)
            logger.info("Existing tables dropped")
        
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        
        table_names = list(Base.metadata.tables.keys())
        logger.info(f"Database initialized successfully with {len(table_names)} tables", extra={
            "tables": table_names
        })
        
        return True
        
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)
        return False


def check_database_status():
    """데이터베이스 상태 확인"""
    try:
        from sqlalchemy import inspect
        
        inspector = inspect(engine)
        existing_tables = inspector.get_table_names()
        expected_tables = list(Base.metadata.tables.keys())
        missing = list(set(expected_tables) - set(existing_tables))
        
        logger.info("Database status check", extra={
            "existing_tables": existing_tables,
            "expected_tables": expected_tables,
            "missing_tables": missing
        })
        
        if not missing:
            logger.info("All required tables exist")
            return True
        else:
            logger.warning(f"Missing tables: {missing}")
            return False
            
    except Exception as e:
        logger.error(f"Database status check failed: {e}", exc_info=True)
        return False


def create_sample_data():
    """샘플 BRD 문서 생성 (개발용, Mock 요약 사용)"""
    import asyncio
    from domain.langgraph.brd_service import BRDService
    
    service = BRDService(use_mock=True)
    result = asyncio.run(service.load_document(SAMPLE_BRD, "sample_brd.md"))
    
    if result["success"]:
        logger.info("Sample data created successfully", extra={
            "document_id": result["document_id"],
            "section_count": len(result["sections"])
        })
        return True
    
    logger.error(f"Sample data creation failed: {result['error']}")
    return False


def main():
    """메인 실행 함수"""
    import argparse
    
    parser = argparse.ArgumentParser(description="Database initialization script")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables before creating")
    parser.add_argument("--sample", action="store_true", help="Create a sample BRD document")
    parser.add_argument("--check", action="store_true", help="Check database status only")
    
    args = parser.parse_args()
    
    setup_logging_from_env()
    logger.info("Database initialization script started")
    
    if args.check:
        success = check_database_status()
        sys.exit(0 if success else 1)
    
    success = init_database(drop_existing=args.drop)
    if not success:
        logger.error("Database initialization failed")
        sys.exit(1)
    
    if args.sample:
        sample_success = create_sample_data()
        if not sample_success:
            logger.warning("Sample data creation failed, but database is initialized")
    
    logger.info("Database initialization completed successfully")


if __name__ == "__main__":
    main()
