"""
섹션 계층 구조 (표시용)

평탄한 섹션 목록을 level 기준 깊이 스택으로 한 번 훑어 트리로 만듭니다.
저장되는 모델에는 부모/자식 링크를 두지 않습니다.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .section_parser import Section


@dataclass
class SectionNode:
    section: Section
    index: int  # 평탄 목록에서의 위치
    children: List["SectionNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "title": self.section.title,
            "level": self.section.level,
            "summary": self.section.summary,
            "characters": len(self.section.content),
            "children": [child.to_dict() for child in self.children],
        }


def build_section_tree(sections: List[Section]) -> List[SectionNode]:
    """
    level이 더 큰 섹션은 직전의 더 얕은 섹션의 자식이 됨.
    # A / ### B / ## C 처럼 단계를 건너뛰어도 B, C 모두 A의 자식.
    """
    roots: List[SectionNode] = []
    stack: List[SectionNode] = []

    for index, section in enumerate(sections):
        node = SectionNode(section=section, index=index)
        while stack and stack[-1].section.level >= section.level:
            stack.pop()
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    return roots
