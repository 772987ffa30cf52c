"""
편집 계획기

전체 섹션 목록과 사용자 요청을 LLM에 보내 어떤 섹션을 어떻게 바꿀지 결정합니다.
응답은 plan_validator로 검증되며, 형식이 잘못된 응답은 빈 계획이 됩니다.
LLM 자체를 사용할 수 없으면 LLMRetryExhausted가 그대로 전파됩니다.
"""
from typing import Any, List, Optional

from langchain_core.messages import HumanMessage, SystemMessage

from app.config import USE_MOCK_LLM
from app.logging_config import get_logger
from .nodes.prompts import build_edit_plan_prompt
from .nodes.update.plan_validator import EditPlan, validate_edit_plan
from .nodes.update.section_parser import Section
from .utils.llm_backoff import acomplete

logger = get_logger("edit_planner")


class EditPlanner:
    """LLM 기반 편집 계획기"""

    def __init__(self, llm: Any):
        self.llm = llm

    async def plan(self, sections: List[Section], prompt: str) -> EditPlan:
        system, user = build_edit_plan_prompt(sections, prompt)
        messages = [SystemMessage(content=system), HumanMessage(content=user)]
        raw = await acomplete(self.llm, messages, purpose="edit_plan")
        plan = validate_edit_plan(raw)
        logger.info(
            f"Edit plan received: {len(plan.updated_sections)} section(s) to update",
            extra={"sections": [s.title for s in plan.updated_sections]},
        )
        return plan


class MockEditPlanner(EditPlanner):
    """개발/테스트용 Mock 계획기: 첫 섹션 끝에 요청 내용을 덧붙임"""

    def __init__(self):
        super().__init__(llm=None)

    async def plan(self, sections: List[Section], prompt: str) -> EditPlan:
        if not sections:
            return EditPlan.empty("Document has no sections to edit")

        first = sections[0]
        return validate_edit_plan({
            "sectionsToUpdate": [
                {"title": first.title, "reasoning": "User requested changes that affect this section"}
            ],
            "updatedSections": [
                {"title": first.title, "content": f"{first.content}\n\n**AI Generated Addition:** {prompt}"}
            ],
            "summaryOfChanges": [f'Added content based on prompt: "{prompt}"'],
        })


def get_edit_planner(use_mock: Optional[bool] = None, llm: Any = None) -> EditPlanner:
    """설정에 따라 실제/Mock 계획기 반환"""
    if use_mock is None:
        use_mock = USE_MOCK_LLM
    if use_mock:
        return MockEditPlanner()
    if llm is None:
        from .utils.llm_factory import create_chat_llm
        llm = create_chat_llm()
    return EditPlanner(llm)
