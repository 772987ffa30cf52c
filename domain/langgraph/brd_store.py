"""
BRD 문서 저장소

문서, 섹션, AI 편집 이력을 SQLAlchemy로 저장/조회합니다.
SQLAlchemy 오류는 롤백 후 StoreUnavailable로 변환됩니다.
"""
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import SessionLocal
from models import AIEdit, BRDDocument, BRDSection
from app.logging_config import get_logger
from .errors import DocumentNotFound, StoreUnavailable
from .nodes.update.plan_validator import EditPlan
from .nodes.update.section_parser import Section

logger = get_logger("brd_store")


def _section_from_row(row: BRDSection) -> Section:
    return Section(
        title=row.title,
        level=row.level,
        content=row.content or "",
        start_index=row.start_index,
        end_index=row.end_index,
        summary=row.summary,
    )


def _document_to_dict(document: BRDDocument) -> Dict[str, Any]:
    return {
        "id": document.id,
        "filename": document.filename,
        "original_content": document.original_content,
        "current_content": document.current_content,
        "created_at": document.created_at.isoformat() if document.created_at is not None else None,
        "updated_at": document.updated_at.isoformat() if document.updated_at is not None else None,
    }


class BRDStore:
    """문서 저장소 (요청마다 세션을 열고 닫음)"""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Store operation failed: {e}", exc_info=True)
            raise StoreUnavailable(f"Database error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @staticmethod
    def _get_document(session: Session, document_id: int) -> BRDDocument:
        document = session.query(BRDDocument).filter(BRDDocument.id == document_id).first()
        if document is None:
            raise DocumentNotFound(document_id)
        return document

    @staticmethod
    def _write_sections(session: Session, document_id: int, sections: List[Section]) -> None:
        session.query(BRDSection).filter(BRDSection.document_id == document_id).delete(
            synchronize_session=False
        )
        for position, section in enumerate(sections):
            session.add(BRDSection(
                document_id=document_id,
                position=position,
                title=section.title,
                level=section.level,
                content=section.content,
                summary=section.summary,
                start_index=section.start_index,
                end_index=section.end_index,
            ))

    @staticmethod
    def _write_edit(session: Session, document_id: int, prompt: str, plan: EditPlan) -> AIEdit:
        history = plan.to_history()
        edit = AIEdit(
            document_id=document_id,
            prompt=prompt,
            sections_updated=history["sectionsToUpdate"],
            summary_of_changes=history["summaryOfChanges"],
        )
        session.add(edit)
        return edit

    def create_document(self, filename: str, content: str, sections: Optional[List[Section]] = None) -> int:
        """문서(및 섹션) 생성 후 ID 반환"""
        with self._transaction() as session:
            document = BRDDocument(
                filename=filename,
                original_content=content,
                current_content=content,
            )
            session.add(document)
            session.flush()
            if sections:
                self._write_sections(session, document.id, sections)
            document_id = document.id

        logger.info(f"Document created: {document_id}", extra={"document_id": document_id})
        return document_id

    def get_document(self, document_id: int) -> Optional[Dict[str, Any]]:
        with self._transaction() as session:
            document = session.query(BRDDocument).filter(BRDDocument.id == document_id).first()
            return _document_to_dict(document) if document else None

    def update_document_content(self, document_id: int, content: str) -> None:
        with self._transaction() as session:
            document = self._get_document(session, document_id)
            document.current_content = content
            document.updated_at = datetime.now(timezone.utc)

    def list_sections(self, document_id: int) -> List[Section]:
        """start_index 순서의 섹션 목록"""
        with self._transaction() as session:
            self._get_document(session, document_id)
            rows = (
                session.query(BRDSection)
                .filter(BRDSection.document_id == document_id)
                .order_by(BRDSection.start_index)
                .all()
            )
            return [_section_from_row(row) for row in rows]

    def save_sections(self, document_id: int, sections: List[Section]) -> None:
        """섹션 전체 교체"""
        with self._transaction() as session:
            self._get_document(session, document_id)
            self._write_sections(session, document_id, sections)

    def save_content(self, document_id: int, content: str, sections: List[Section]) -> None:
        """수동 편집 결과(본문, 섹션)를 하나의 트랜잭션으로 저장"""
        with self._transaction() as session:
            document = self._get_document(session, document_id)
            document.current_content = content
            document.updated_at = datetime.now(timezone.utc)
            self._write_sections(session, document_id, sections)

        logger.info(f"Content saved for document {document_id}", extra={"document_id": document_id})

    def replace_section_content(self, section_id: int, content: str, summary: Optional[str]) -> None:
        with self._transaction() as session:
            row = session.query(BRDSection).filter(BRDSection.id == section_id).first()
            if row is None:
                raise StoreUnavailable(f"Section not found: {section_id}", title="Section not found")
            row.content = content
            row.summary = summary

    def record_edit_history(self, document_id: int, prompt: str, plan: EditPlan) -> int:
        with self._transaction() as session:
            self._get_document(session, document_id)
            edit = self._write_edit(session, document_id, prompt, plan)
            session.flush()
            return edit.id

    def save_edit(
        self,
        document_id: int,
        content: str,
        sections: List[Section],
        prompt: str,
        plan: EditPlan,
    ) -> None:
        """AI 편집 결과(본문, 섹션, 이력)를 하나의 트랜잭션으로 저장"""
        with self._transaction() as session:
            document = self._get_document(session, document_id)
            document.current_content = content
            document.updated_at = datetime.now(timezone.utc)
            self._write_sections(session, document_id, sections)
            self._write_edit(session, document_id, prompt, plan)

        logger.info(f"Edit saved for document {document_id}", extra={"document_id": document_id})

    def list_edits(self, document_id: int) -> List[Dict[str, Any]]:
        with self._transaction() as session:
            self._get_document(session, document_id)
            edits = (
                session.query(AIEdit)
                .filter(AIEdit.document_id == document_id)
                .order_by(AIEdit.created_at, AIEdit.id)
                .all()
            )
            return [
                {
                    "id": edit.id,
                    "prompt": edit.prompt,
                    "sections_updated": edit.sections_updated or [],
                    "summary_of_changes": edit.summary_of_changes or [],
                    "created_at": edit.created_at.isoformat() if edit.created_at is not None else None,
                }
                for edit in edits
            ]
