"""
LangGraph AI 편집 워크플로우 상태 정의
"""
from typing import Any, Dict, List, Optional, TypedDict

from .nodes.update.plan_validator import EditPlan
from .nodes.update.section_parser import Section


class BRDEditState(TypedDict, total=False):
    """
    AI 편집 워크플로우 상태

    워크플로우 단계:
    1. EditPlanner: 섹션 목록 + 프롬프트 → 편집 계획
    2. SectionPatcher: 계획 적용 → 새 본문, 재파싱된 섹션
    3. SectionSummarizer: 교체된 섹션 요약 재생성, 나머지는 이어받기
    4. EditSaver: 본문/섹션/이력 저장 (단일 트랜잭션)
    """

    # ========== 입력 데이터 ==========
    document_id: Optional[int]
    prompt: str
    original_content: str
    original_sections: List[Section]

    # ========== 계획 ==========
    plan: Optional[EditPlan]

    # ========== 패치 결과 ==========
    new_content: Optional[str]
    new_sections: Optional[List[Section]]
    applied_titles: List[str]
    unmatched_titles: List[str]

    # ========== 저장 결과 ==========
    saved: bool

    # ========== 상태 및 에러 ==========
    status: str  # "planning", "patching", "summarizing", "saving", "completed", "no_changes", "error"
    error: Optional[str]
    error_title: Optional[str]
    error_kind: Optional[str]  # "llm", "store", "not_found", "internal"
    metadata: Dict[str, Any]
