"""
④ 편집 저장 노드

본문, 섹션, 편집 이력을 하나의 트랜잭션으로 저장합니다.
document_id가 없으면(저장되지 않은 세션) 저장을 건너뜁니다.
"""
from typing import TYPE_CHECKING

from ..brd_state import BRDEditState
from ..errors import record_failure
from app.logging_config import log_brd_event

if TYPE_CHECKING:
    from ..brd_store import BRDStore


def edit_saver_node(state: BRDEditState, store: "BRDStore") -> BRDEditState:
    try:
        document_id = state.get("document_id")
        if document_id is None:
            state["saved"] = False
        else:
            store.save_edit(
                document_id,
                state["new_content"],
                state.get("new_sections") or [],
                state["prompt"],
                state["plan"],
            )
            state["saved"] = True
            log_brd_event("ai_edit_saved", document_id, sections=state.get("applied_titles"))

        state["status"] = "completed"
        return state
    except Exception as e:
        return record_failure(state, "Saving edit", e)
