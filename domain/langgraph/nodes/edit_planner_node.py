"""
① 편집 계획 노드

섹션 목록과 사용자 프롬프트로 LLM 편집 계획을 받아옵니다.
"""
from typing import TYPE_CHECKING

from ..brd_state import BRDEditState
from ..errors import record_failure
from app.logging_config import get_logger

if TYPE_CHECKING:
    from ..edit_planner import EditPlanner

logger = get_logger("edit_planner_node")


async def edit_planner_node(state: BRDEditState, planner: "EditPlanner") -> BRDEditState:
    """
    입력:
        - original_sections, prompt
    출력:
        - plan: 검증된 EditPlan (형식 오류면 빈 계획)
        - status: "patching" / 빈 계획이면 "no_changes"
    """
    try:
        plan = await planner.plan(state.get("original_sections") or [], state["prompt"])
        state["plan"] = plan
        state["status"] = "no_changes" if plan.is_empty else "patching"
        return state
    except Exception as e:
        logger.error(f"Edit planning failed: {e}")
        return record_failure(state, "Edit planning", e)
