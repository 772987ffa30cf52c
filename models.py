"""
BRD 문서 편집기 ORM 모델

- BRDDocument: 업로드된 BRD 원본과 현재 내용
- BRDSection: 현재 내용에서 파싱된 섹션 (요약 포함)
- AIEdit: AI 편집 요청 이력
"""
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BRDDocument(Base):
    __tablename__ = "brd_documents"

    id = Column(Integer, primary_key=True, index=True)
    filename = Column(String(255), nullable=False)
    original_content = Column(Text, nullable=False, default="")
    current_content = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    sections = relationship(
        "BRDSection",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="BRDSection.start_index",
    )
    edits = relationship(
        "AIEdit",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="AIEdit.created_at",
    )


class BRDSection(Base):
    __tablename__ = "brd_sections"

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, ForeignKey("brd_documents.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    title = Column(String(500), nullable=False)
    level = Column(Integer, nullable=False, default=1)
    content = Column(Text, nullable=False, default="")
    summary = Column(Text, nullable=True)
    start_index = Column(Integer, nullable=False)
    end_index = Column(Integer, nullable=False)

    document = relationship("BRDDocument", back_populates="sections")


class AIEdit(Base):
    __tablename__ = "ai_edits"

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, ForeignKey("brd_documents.id", ondelete="CASCADE"), nullable=False, index=True)
    prompt = Column(Text, nullable=False)
    sections_updated = Column(JSON, nullable=False, default=list)
    summary_of_changes = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    document = relationship("BRDDocument", back_populates="edits")
