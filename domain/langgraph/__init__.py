"""
Langgraph 도메인 모듈
LLM을 이용한 BRD 섹션 요약 및 AI 편집 시스템
"""
from .brd_service import BRDService, get_brd_service, reset_brd_service
from .brd_session import BRDSession
from .brd_store import BRDStore
from .brd_workflow import BRDEditWorkflow

__all__ = [
    "BRDService",
    "BRDSession",
    "BRDStore",
    "BRDEditWorkflow",
    "get_brd_service",
    "reset_brd_service",
]
