"""
마크다운 섹션 파싱 모듈

BRD 마크다운 문서를 ATX 헤더(# ~ ######...) 기준으로 평탄한 섹션 목록으로 분리합니다.
섹션 경계는 줄 번호(0부터 시작)로 기록되며, 패처가 원본 줄 배열을 그대로
재사용할 수 있도록 content.split('\\n') 기준으로 계산합니다.
"""

import re
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

# 줄 전체에 앵커된 헤더 패턴: '#' 1개 이상 + 공백 + 내용
HEADING_PATTERN = re.compile(r'^(#+)\s+(.+)$')


@dataclass
class Section:
    """헤더 한 줄과 다음 헤더 직전까지의 본문"""
    title: str
    level: int
    content: str
    start_index: int
    end_index: int
    summary: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


def match_heading(line: str) -> Optional[re.Match]:
    """헤더 줄이면 match 객체 반환 (제목이 공백뿐이면 None)"""
    m = HEADING_PATTERN.match(line)
    if not m or not m.group(2).strip():
        return None
    return m


def parse_markdown_sections(content: str) -> List[Section]:
    """
    마크다운을 섹션 목록으로 파싱

    - 첫 헤더 이전 내용(프리앰블)은 섹션으로 잡지 않음
    - 헤더가 없으면 빈 리스트
    - 실패 조건 없음: 형식이 이상하면 섹션이 줄어들 뿐
    """
    if not content:
        return []

    lines = content.split('\n')
    sections: List[Section] = []
    current: Optional[Dict] = None
    content_lines: List[str] = []

    for index, line in enumerate(lines):
        m = match_heading(line)
        if m:
            if current is not None:
                sections.append(Section(
                    content='\n'.join(content_lines).strip(),
                    end_index=index - 1,
                    **current,
                ))
            current = {
                'title': m.group(2).strip(),
                'level': len(m.group(1)),
                'start_index': index,
            }
            content_lines = []
        elif current is not None:
            content_lines.append(line)

    if current is not None:
        sections.append(Section(
            content='\n'.join(content_lines).strip(),
            end_index=len(lines) - 1,
            **current,
        ))

    return sections


def find_section(sections: List[Section], title: str) -> Optional[Section]:
    """제목이 정확히 일치하는 첫 섹션 (대소문자 구분)"""
    for section in sections:
        if section.title == title:
            return section
    return None


def duplicate_titles(sections: List[Section]) -> List[str]:
    """두 번 이상 등장하는 제목 목록 (첫 등장 순서)"""
    seen = set()
    duplicates: List[str] = []
    for section in sections:
        if section.title in seen and section.title not in duplicates:
            duplicates.append(section.title)
        seen.add(section.title)
    return duplicates


def carry_over_summaries(new_sections: List[Section], old_sections: List[Section]) -> List[Section]:
    """수동 편집 후 재파싱된 섹션에 같은 제목의 기존 요약을 이어 붙임"""
    previous: Dict[str, Optional[str]] = {}
    for section in old_sections:
        previous.setdefault(section.title, section.summary)

    for section in new_sections:
        section.summary = previous.get(section.title) or None
    return new_sections
