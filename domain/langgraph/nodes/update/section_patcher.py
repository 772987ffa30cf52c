"""
섹션 패치 모듈

파싱된 섹션 경계를 이용해 지정된 섹션만 새 내용으로 교체하고,
나머지 영역(프리앰블, 교체 대상이 아닌 섹션)은 원본 그대로 보존합니다.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from .section_parser import Section


@dataclass
class PatchResult:
    """패치 결과"""
    content: str
    applied: List[str] = field(default_factory=list)  # 문서 순서
    unmatched: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.applied)


def _trim_blank_lines(lines: List[str]) -> List[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def build_section_block(section: Section, new_content: str, line_end: str = '') -> List[str]:
    """헤더 줄 + 새 본문 줄 목록 (line_end: CRLF 문서면 CR 문자)"""
    heading = f"{'#' * section.level} {section.title}"
    body = _trim_blank_lines([line.rstrip('\r') for line in new_content.split('\n')])
    return [line + line_end for line in [heading] + body]


def _trailing_blank_count(lines: List[str], start: int, end: int) -> int:
    """섹션 영역 끝의 빈 줄 개수 (헤더 줄 제외)"""
    count = 0
    index = end
    while index > start and not lines[index].strip():
        count += 1
        index -= 1
    return count


def apply_replacements(
    original_text: str,
    original_sections: List[Section],
    replacements: Mapping[str, str],
) -> PatchResult:
    """
    제목 → 새 내용 매핑을 원본 문서에 적용

    - 제목은 정확히 일치해야 하며 중복 제목이면 첫 섹션만 교체
    - 매칭되지 않는 제목은 추가하지 않고 건너뜀 (unmatched로 보고)
    - 원본 오프셋 기준으로 뒤쪽 섹션부터 교체하여 앞쪽 오프셋이 유지됨
    - 섹션 끝의 빈 줄(다음 헤더와의 간격)은 그대로 유지
    - CRLF 문서는 교체된 블록도 CRLF로 기록
    """
    lines = original_text.split('\n')

    targets: Dict[str, Section] = {}
    unmatched: List[str] = []
    for title in replacements:
        section = next((s for s in original_sections if s.title == title), None)
        if section is None:
            unmatched.append(title)
        else:
            targets[title] = section

    ordered = sorted(targets.items(), key=lambda item: item[1].start_index, reverse=True)
    for title, section in ordered:
        start, end = section.start_index, section.end_index
        # 헤더 줄의 줄바꿈 형식(LF/CRLF)을 새 블록에도 사용
        line_end = '\r' if lines[start].endswith('\r') else ''
        block = build_section_block(section, replacements[title], line_end)
        trailing = _trailing_blank_count(lines, start, end)
        if not trailing and not lines[end].endswith('\r'):
            # 줄바꿈 없이 끝나는 마지막 줄
            block[-1] = block[-1].rstrip('\r')
        lines[start:end + 1] = block + lines[end + 1 - trailing:end + 1]

    applied = [title for title, _ in reversed(ordered)]
    return PatchResult(content='\n'.join(lines), applied=applied, unmatched=unmatched)


def patch_document(
    original_text: str,
    original_sections: List[Section],
    replacements: Mapping[str, str],
) -> str:
    """apply_replacements의 텍스트만 반환"""
    return apply_replacements(original_text, original_sections, replacements).content
