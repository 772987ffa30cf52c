"""
BRD 편집 세션 컨텍스트

현재 문서 본문과 섹션 목록을 담는 값 객체입니다.
각 작업은 세션을 입력으로 받고 (갱신된) 새 세션을 반환합니다.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .nodes.update.section_parser import Section


@dataclass(frozen=True)
class BRDSession:
    document_id: Optional[int]
    filename: str
    content: str
    sections: List[Section] = field(default_factory=list)

    def with_content(self, content: str, sections: List[Section]) -> "BRDSession":
        return replace(self, content=content, sections=sections)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document_id": self.document_id,
            "filename": self.filename,
            "content": self.content,
            "sections": [s.to_dict() for s in self.sections],
        }
