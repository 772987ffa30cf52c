"""
② 섹션 패치 노드

편집 계획의 교체 내용을 원본 본문에 적용하고 결과를 재파싱합니다.
"""
from ..brd_state import BRDEditState
from ..errors import record_failure
from .update.section_parser import duplicate_titles, parse_markdown_sections
from .update.section_patcher import apply_replacements
from app.logging_config import get_logger

logger = get_logger("section_patcher_node")


def section_patcher_node(state: BRDEditState) -> BRDEditState:
    """
    입력:
        - original_content, original_sections, plan
    출력:
        - new_content, new_sections
        - applied_titles / unmatched_titles
        - status: "summarizing" / 교체된 섹션이 없으면 "no_changes"
    """
    try:
        plan = state["plan"]
        original_sections = state.get("original_sections") or []

        duplicates = duplicate_titles(original_sections)
        if duplicates:
            logger.warning(f"Duplicate section titles, first match is used: {', '.join(duplicates)}")

        result = apply_replacements(state["original_content"], original_sections, plan.replacements())
        if result.unmatched:
            logger.warning(f"Sections not found in document, skipped: {', '.join(result.unmatched)}")

        state["applied_titles"] = result.applied
        state["unmatched_titles"] = result.unmatched

        if not result.changed:
            state["status"] = "no_changes"
            return state

        state["new_content"] = result.content
        state["new_sections"] = parse_markdown_sections(result.content)
        state["status"] = "summarizing"
        return state
    except Exception as e:
        return record_failure(state, "Section patching", e)
