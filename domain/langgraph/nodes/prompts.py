"""
LLM 프롬프트 정의

섹션 요약과 편집 계획 수립에 사용하는 system/user 프롬프트를 생성합니다.
"""
import json
from typing import List, Tuple

from .update.section_parser import Section

SUMMARY_SYSTEM_PROMPT = (
    "You are a business analyst. Create a concise 1-2 sentence summary "
    "of the following BRD section content."
)

EDIT_PLAN_SYSTEM_PROMPT = """You are an expert business analyst. Given a BRD document and user prompt, determine what sections need to be updated and provide the updated content.

Rules:
- Only use section titles exactly as they appear in the document.
- "content" is the full new body of the section, without its heading line.
- Leave sections that do not need changes out of "updatedSections".
- Respond with JSON only, no commentary.

Response format (JSON):
{
  "sectionsToUpdate": [{"title": "section title", "reasoning": "why this section needs updating"}],
  "updatedSections": [{"title": "section title", "content": "new content"}],
  "summaryOfChanges": ["change 1", "change 2"]
}"""


def build_summary_prompt(content: str, max_chars: int) -> Tuple[str, str]:
    """섹션 요약용 (system, user)"""
    return SUMMARY_SYSTEM_PROMPT, content[:max_chars]


def build_edit_plan_prompt(sections: List[Section], prompt: str) -> Tuple[str, str]:
    """편집 계획용 (system, user)"""
    payload = json.dumps(
        [{"title": s.title, "content": s.content} for s in sections],
        ensure_ascii=False,
    )
    user_prompt = (
        f"Current document sections: {payload}\n\n"
        f"User request: \"{prompt}\"\n\n"
        "Please provide the updated sections in JSON format."
    )
    return EDIT_PLAN_SYSTEM_PROMPT, user_prompt
