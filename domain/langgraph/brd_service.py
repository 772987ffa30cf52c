"""
BRD 문서 처리 서비스

화면 계층에 노출되는 작업(문서 로드, 수동 수정, AI 편집)을 제공합니다.
모든 작업은 BRDSession을 받아 갱신된 BRDSession을 돌려주며,
실패는 작업 경계에서 잡아 {"success": False, "error_title", "error"} 형태로 반환합니다.
실패 시 반환되는 세션은 입력 세션 그대로입니다.
"""
import copy
from typing import Any, Dict, List, Optional

from app.logging_config import get_logger, log_brd_event, log_error
from .brd_session import BRDSession
from .brd_store import BRDStore
from .brd_workflow import BRDEditWorkflow
from .edit_planner import EditPlanner, get_edit_planner
from .errors import BRDError, DocumentNotFound, InvalidRequest, error_kind
from .nodes.update.section_parser import (
    Section,
    carry_over_summaries,
    duplicate_titles,
    parse_markdown_sections,
)
from .nodes.update.section_tree import build_section_tree
from .summary_generator import SummaryGenerator, get_summary_generator

logger = get_logger("brd_service")


def _failure(exc: BaseException, fallback_title: str, session: Optional[BRDSession] = None) -> Dict[str, Any]:
    if isinstance(exc, BRDError):
        title, description = exc.title, exc.description
    else:
        title, description = fallback_title, str(exc) or exc.__class__.__name__
    return {
        "success": False,
        "error_title": title,
        "error": description,
        "error_kind": error_kind(exc),
        "session": session,
    }


class BRDService:
    """BRD 문서 처리 서비스"""

    def __init__(
        self,
        store: Optional[BRDStore] = None,
        summary_generator: Optional[SummaryGenerator] = None,
        edit_planner: Optional[EditPlanner] = None,
        use_mock: Optional[bool] = None,
    ):
        self.store = store or BRDStore()
        self.summary_generator = summary_generator or get_summary_generator(use_mock)
        self.edit_planner = edit_planner or get_edit_planner(use_mock)
        self.workflow = BRDEditWorkflow(self.edit_planner, self.summary_generator, self.store)
        logger.info(
            "BRDService initialized",
            extra={
                "summary_generator": self.summary_generator.__class__.__name__,
                "edit_planner": self.edit_planner.__class__.__name__,
            },
        )

    async def load_document(self, content: str, filename: str) -> Dict[str, Any]:
        """
        업로드된 BRD 로드

        파싱 → 섹션별 요약(동시 실행) → 문서/섹션 저장

        Returns:
            {"success", "session", "document_id", "sections"} 또는 실패 결과
        """
        try:
            log_brd_event("load_started", None, source_filename=filename, characters=len(content))

            sections = parse_markdown_sections(content)
            duplicates = duplicate_titles(sections)
            if duplicates:
                logger.warning(f"Duplicate section titles in {filename}: {', '.join(duplicates)}")

            await self.summary_generator.summarize_sections(sections)
            document_id = self.store.create_document(filename, content, sections)

            session = BRDSession(document_id=document_id, filename=filename, content=content, sections=sections)
            log_brd_event("load_completed", document_id, section_count=len(sections))
            return {
                "success": True,
                "session": session,
                "document_id": document_id,
                "sections": sections,
                "message": f"Processed {len(sections)} sections from {filename}",
            }
        except Exception as e:
            log_error("Error loading document", e, source_filename=filename)
            return _failure(e, "Error loading document")

    def update_document(self, session: BRDSession, new_content: str) -> Dict[str, Any]:
        """
        수동 편집 반영

        재파싱 후 같은 제목의 기존 요약을 이어받고(재생성 없음) 저장합니다.
        """
        try:
            sections = carry_over_summaries(parse_markdown_sections(new_content), session.sections)

            if session.document_id is not None:
                self.store.save_content(session.document_id, new_content, sections)

            updated = session.with_content(new_content, sections)
            log_brd_event("manual_update", session.document_id, section_count=len(sections))
            return {"success": True, "session": updated, "sections": sections}
        except Exception as e:
            log_error("Error updating document", e, document_id=session.document_id)
            return _failure(e, "Error updating document", session)

    async def request_edit(self, session: BRDSession, prompt: str) -> Dict[str, Any]:
        """
        AI 편집 요청

        계획 → 패치 → 요약 → 저장을 순차 실행합니다.
        빈 계획(형식 오류 포함)은 문서를 바꾸지 않는 성공으로 처리됩니다.

        Returns:
            {"success", "session", "sections", "change_summary", "sections_updated"} 또는 실패 결과
        """
        try:
            if not prompt or not prompt.strip():
                raise InvalidRequest("Edit prompt must not be empty", title="Invalid edit request")

            log_brd_event("ai_edit_started", session.document_id, prompt_length=len(prompt))
            # 노드가 섹션 객체를 건드려도 입력 세션이 바뀌지 않도록 복사본 사용
            state = await self.workflow.run(
                prompt=prompt,
                content=session.content,
                sections=copy.deepcopy(session.sections),
                document_id=session.document_id,
            )

            status = state.get("status")
            if status == "error":
                log_error("AI edit failed", None, document_id=session.document_id, error=state.get("error"))
                return {
                    "success": False,
                    "error_title": state.get("error_title") or "AI edit failed",
                    "error": state.get("error") or "Failed to process your request",
                    "error_kind": state.get("error_kind") or "internal",
                    "session": session,
                }

            plan = state.get("plan")
            change_summary: List[str] = list(plan.summary_of_changes) if plan else []
            sections_updated = [s.model_dump() for s in plan.sections_to_update] if plan else []

            if status == "no_changes":
                if plan is None or not plan.is_empty or not change_summary:
                    change_summary.append("No matching sections were changed")
                log_brd_event("ai_edit_no_changes", session.document_id)
                return {
                    "success": True,
                    "session": session,
                    "sections": session.sections,
                    "change_summary": change_summary,
                    "sections_updated": sections_updated,
                    "applied": [],
                    "unmatched": state.get("unmatched_titles") or [],
                }

            new_sections: List[Section] = state.get("new_sections") or []
            updated = session.with_content(state["new_content"], new_sections)
            log_brd_event("ai_edit_completed", session.document_id, applied=state.get("applied_titles"))
            return {
                "success": True,
                "session": updated,
                "sections": new_sections,
                "change_summary": change_summary,
                "sections_updated": sections_updated,
                "applied": state.get("applied_titles") or [],
                "unmatched": state.get("unmatched_titles") or [],
            }
        except Exception as e:
            log_error("Error processing AI edit", e, document_id=session.document_id)
            return _failure(e, "AI edit failed", session)

    def open_session(self, document_id: int) -> BRDSession:
        """저장된 문서로 세션 복원 (DocumentNotFound / StoreUnavailable 전파)"""
        document = self.store.get_document(document_id)
        if document is None:
            raise DocumentNotFound(document_id)
        sections = self.store.list_sections(document_id)
        return BRDSession(
            document_id=document_id,
            filename=document["filename"],
            content=document["current_content"],
            sections=sections,
        )

    def get_hierarchy(self, session: BRDSession) -> List[Dict[str, Any]]:
        """표시용 섹션 트리"""
        return [node.to_dict() for node in build_section_tree(session.sections)]

    async def summarize(self, content: str) -> str:
        """단일 본문 요약"""
        return await self.summary_generator.generate_summary(content)


# 전역 서비스 인스턴스
_service_instance: Optional[BRDService] = None


def get_brd_service() -> BRDService:
    """BRD 서비스 싱글톤 인스턴스 반환"""
    global _service_instance
    if _service_instance is None:
        _service_instance = BRDService()
    return _service_instance


def reset_brd_service():
    """서비스 인스턴스 리셋 (테스트용)"""
    global _service_instance
    _service_instance = None
