"""
섹션 요약 생성기

섹션마다 LLM 요약을 하나씩 만들며, 여러 섹션은 동시에 요청합니다.
개별 실패는 placeholder 요약으로 대체되어 전체 흐름을 막지 않습니다.
"""
import asyncio
from typing import Any, List, Optional

from langchain_core.messages import HumanMessage, SystemMessage

from app.config import SUMMARY_INPUT_MAX_CHARS, SUMMARY_MAX_CHARS, SUMMARY_MAX_CONCURRENCY, USE_MOCK_LLM
from app.logging_config import get_logger
from .nodes.prompts import build_summary_prompt
from .nodes.update.section_parser import Section
from .utils.llm_backoff import acomplete

logger = get_logger("summary_generator")

EMPTY_SECTION_SUMMARY = "Empty section"
SUMMARY_PLACEHOLDER = "Summary unavailable"


class SummaryGenerator:
    """LLM 기반 섹션 요약기"""

    def __init__(self, llm: Any, max_concurrency: int = SUMMARY_MAX_CONCURRENCY):
        self.llm = llm
        self.max_concurrency = max(1, max_concurrency)

    async def generate_summary(self, content: str) -> str:
        """섹션 본문 요약 (빈 섹션은 LLM 호출 없이 고정 문구)"""
        if not content.strip():
            return EMPTY_SECTION_SUMMARY

        system, user = build_summary_prompt(content, SUMMARY_INPUT_MAX_CHARS)
        messages = [SystemMessage(content=system), HumanMessage(content=user)]
        summary = await acomplete(self.llm, messages, purpose="summary")
        return summary[:SUMMARY_MAX_CHARS]

    async def summarize_sections(self, sections: List[Section]) -> List[Section]:
        """
        모든 섹션 요약을 동시에 생성 (섹션당 요청 1개)

        모든 요청이 끝나야 반환되며, 실패한 섹션은 SUMMARY_PLACEHOLDER를 가짐.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _summarize(section: Section) -> None:
            async with semaphore:
                try:
                    section.summary = await self.generate_summary(section.content)
                except Exception as e:
                    logger.warning(
                        f"Summary generation failed for section '{section.title}': {e}",
                        extra={"section_title": section.title},
                    )
                    section.summary = SUMMARY_PLACEHOLDER

        if sections:
            logger.info(f"Generating summaries for {len(sections)} sections")
            await asyncio.gather(*(_summarize(s) for s in sections))
        return sections


class MockSummaryGenerator(SummaryGenerator):
    """개발/테스트용 Mock 요약기 (네트워크 호출 없음)"""

    def __init__(self):
        super().__init__(llm=None)

    async def generate_summary(self, content: str) -> str:
        if not content.strip():
            return EMPTY_SECTION_SUMMARY
        words = content.split()[:20]
        return f"Summary: {' '.join(words)}..."


def get_summary_generator(use_mock: Optional[bool] = None, llm: Any = None) -> SummaryGenerator:
    """설정에 따라 실제/Mock 요약기 반환"""
    if use_mock is None:
        use_mock = USE_MOCK_LLM
    if use_mock:
        return MockSummaryGenerator()
    if llm is None:
        from .utils.llm_factory import create_chat_llm
        llm = create_chat_llm()
    return SummaryGenerator(llm)
