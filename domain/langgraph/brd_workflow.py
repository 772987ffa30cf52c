from functools import partial
from typing import Any, Dict, List, Optional

from langgraph.graph import END, StateGraph

from .brd_state import BRDEditState
from .brd_store import BRDStore
from .edit_planner import EditPlanner
from .nodes import (
    edit_planner_node,
    edit_saver_node,
    section_patcher_node,
    section_summarizer_node,
)
from .nodes.update.section_parser import Section
from .summary_generator import SummaryGenerator


def _route_after(next_node: str, expected_status: str):
    """status가 기대값이면 다음 노드, 아니면 종료"""
    def _route(state: BRDEditState) -> str:
        return next_node if state.get("status") == expected_status else END
    return _route


#LangGraph AI 편집 워크플로우 메인 클래스
class BRDEditWorkflow:
    """
    BRD AI 편집 워크플로우

    4개 노드로 구성:
        1. edit_planner: LLM 편집 계획 (검증 실패 시 빈 계획 → 종료)
        2. section_patcher: 계획 적용 + 재파싱
        3. section_summarizer: 교체된 섹션 요약
        4. edit_saver: DB 저장 (단일 트랜잭션)

    계획이 완전히 확정된 뒤에만 패치가 적용되고,
    저장이 끝나야 문서가 갱신된 것으로 간주됩니다.
    """

    def __init__(self, planner: EditPlanner, summarizer: SummaryGenerator, store: BRDStore):
        self.planner = planner
        self.summarizer = summarizer
        self.store = store
        self.workflow = self._build_workflow()

    def _build_workflow(self):
        """LangGraph 워크플로우 구성"""
        workflow = StateGraph(BRDEditState)

        workflow.add_node("edit_planner", partial(edit_planner_node, planner=self.planner))
        workflow.add_node("section_patcher", section_patcher_node)
        workflow.add_node("section_summarizer", partial(section_summarizer_node, summarizer=self.summarizer))
        workflow.add_node("edit_saver", partial(edit_saver_node, store=self.store))

        workflow.set_entry_point("edit_planner")
        workflow.add_conditional_edges(
            "edit_planner", _route_after("section_patcher", "patching"),
            {"section_patcher": "section_patcher", END: END},
        )
        workflow.add_conditional_edges(
            "section_patcher", _route_after("section_summarizer", "summarizing"),
            {"section_summarizer": "section_summarizer", END: END},
        )
        workflow.add_conditional_edges(
            "section_summarizer", _route_after("edit_saver", "saving"),
            {"edit_saver": "edit_saver", END: END},
        )
        workflow.add_edge("edit_saver", END)

        return workflow.compile()

    async def run(
        self,
        prompt: str,
        content: str,
        sections: List[Section],
        document_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        워크플로우 실행

        Returns:
            최종 BRDEditState (status: "completed" | "no_changes" | "error")
        """
        initial_state: BRDEditState = {
            "document_id": document_id,
            "prompt": prompt,
            "original_content": content,
            "original_sections": sections,
            "applied_titles": [],
            "unmatched_titles": [],
            "saved": False,
            "status": "planning",
            "metadata": {},
        }
        return await self.workflow.ainvoke(initial_state)
