"""
섹션 처리 모듈

섹션 파싱, 패치, 편집 계획 검증, 표시용 계층 구조를 제공합니다.
"""

from .section_parser import (
    HEADING_PATTERN,
    Section,
    carry_over_summaries,
    duplicate_titles,
    find_section,
    parse_markdown_sections,
)

from .section_patcher import (
    PatchResult,
    apply_replacements,
    patch_document,
)

from .plan_validator import (
    EditPlan,
    SectionToUpdate,
    UpdatedSection,
    validate_edit_plan,
)

from .section_tree import SectionNode, build_section_tree

__all__ = [
    'HEADING_PATTERN',
    'Section',
    'carry_over_summaries',
    'duplicate_titles',
    'find_section',
    'parse_markdown_sections',
    'PatchResult',
    'apply_replacements',
    'patch_document',
    'EditPlan',
    'SectionToUpdate',
    'UpdatedSection',
    'validate_edit_plan',
    'SectionNode',
    'build_section_tree',
]
