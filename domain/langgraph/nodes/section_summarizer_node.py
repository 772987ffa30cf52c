"""
③ 섹션 요약 노드

교체된 섹션은 요약을 새로 만들고, 나머지 섹션은 같은 제목의 기존 요약을 이어받습니다.
"""
from typing import TYPE_CHECKING

from ..brd_state import BRDEditState
from ..errors import record_failure
from .update.section_parser import carry_over_summaries

if TYPE_CHECKING:
    from ..summary_generator import SummaryGenerator


async def section_summarizer_node(state: BRDEditState, summarizer: "SummaryGenerator") -> BRDEditState:
    try:
        new_sections = state.get("new_sections") or []
        carry_over_summaries(new_sections, state.get("original_sections") or [])

        applied = set(state.get("applied_titles") or [])
        changed = [s for s in new_sections if s.title in applied or s.summary is None]
        await summarizer.summarize_sections(changed)

        state["status"] = "saving"
        return state
    except Exception as e:
        return record_failure(state, "Summary generation", e)
