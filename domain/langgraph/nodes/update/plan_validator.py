"""
편집 계획(Edit Plan) 검증 모듈

LLM이 반환한 JSON 편집 계획을 엄격하게 검증합니다.
파싱/검증 실패 시 예외를 던지지 않고 빈 계획으로 대체하여
문서가 일부만 패치되는 일이 없도록 합니다.
"""

import json
import re
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from app.logging_config import get_logger

logger = get_logger("plan_validator")

# ```json ... ``` 코드펜스
_CODE_FENCE = re.compile(r'^\s*```(?:json)?\s*\n?(.*?)\n?\s*```\s*$', re.DOTALL)


class SectionToUpdate(BaseModel):
    """업데이트 대상 섹션 (정보용, 패치에는 사용하지 않음)"""
    title: str
    reasoning: str = ""


class UpdatedSection(BaseModel):
    """섹션 교체 내용"""
    title: str
    content: str

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value


class EditPlan(BaseModel):
    """LLM 편집 계획 (camelCase 키만 허용)"""
    sections_to_update: List[SectionToUpdate] = Field(alias="sectionsToUpdate")
    updated_sections: List[UpdatedSection] = Field(alias="updatedSections")
    summary_of_changes: List[str] = Field(alias="summaryOfChanges")

    @classmethod
    def empty(cls, message: str) -> "EditPlan":
        """변경 없는 안전한 계획"""
        return cls.model_validate({"sectionsToUpdate": [], "updatedSections": [], "summaryOfChanges": [message]})

    @property
    def is_empty(self) -> bool:
        return not self.updated_sections

    def replacements(self) -> Dict[str, str]:
        """제목 → 새 내용 (같은 제목이 반복되면 첫 항목 유지)"""
        result: Dict[str, str] = {}
        for section in self.updated_sections:
            if section.title in result:
                logger.warning(f"Duplicate updated section ignored: {section.title}")
                continue
            result[section.title] = section.content
        return result

    def to_history(self) -> Dict[str, Any]:
        """원래 응답 형태(camelCase)로 직렬화"""
        return self.model_dump(by_alias=True)


def _strip_code_fence(text: str) -> str:
    m = _CODE_FENCE.match(text)
    return m.group(1) if m else text


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}" if location else item.get("msg", ""))
    return "; ".join(parts)


def validate_edit_plan(raw: Union[str, bytes, Dict[str, Any], None]) -> EditPlan:
    """
    편집 계획 검증

    규칙:
        - sectionsToUpdate / updatedSections / summaryOfChanges 세 키가 모두 존재하고 리스트여야 함 (빈 리스트 허용)
        - updatedSections의 각 항목은 비어있지 않은 title, content를 가져야 함

    Returns:
        검증된 EditPlan, 실패 시 EditPlan.empty("Edit plan rejected: ...")
    """
    try:
        if isinstance(raw, (str, bytes)):
            text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            data = json.loads(_strip_code_fence(text))
        else:
            data = raw

        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")

        return EditPlan.model_validate(data)

    except ValidationError as e:
        reason = _describe(e)
    except (ValueError, UnicodeDecodeError) as e:
        # json.JSONDecodeError는 ValueError의 하위 클래스
        reason = str(e)

    logger.warning(f"Edit plan rejected: {reason}")
    return EditPlan.empty(f"Edit plan rejected: {reason}")
