from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

# 1. 클라이언트 요청 스키마
class DocumentLoadRequest(BaseModel):
    filename: str = Field(..., min_length=1)
    content: str # Markdown 내용

class DocumentContentUpdate(BaseModel):
    content: str

class EditRequest(BaseModel):
    prompt: str = Field(..., min_length=1)

class ContentRequest(BaseModel):
    content: str


# 2. 클라이언트에게 전송할 응답 스키마
class SectionResponse(BaseModel):
    title: str
    level: int
    content: str
    summary: Optional[str] = None
    start_index: int
    end_index: int

    class Config:
        from_attributes = True

class DocumentResponse(BaseModel):
    document_id: Optional[int] = None
    filename: str
    content: str
    sections: List[SectionResponse] = []

class SectionsResponse(BaseModel):
    document_id: Optional[int] = None
    sections: List[SectionResponse] = []

class SectionToUpdateResponse(BaseModel):
    title: str
    reasoning: str = ""

class EditResponse(DocumentResponse):
    change_summary: List[str] = []
    sections_updated: List[SectionToUpdateResponse] = []
    applied: List[str] = []
    unmatched: List[str] = []

class SectionNodeResponse(BaseModel):
    index: int
    title: str
    level: int
    summary: Optional[str] = None
    characters: int
    children: List["SectionNodeResponse"] = []

SectionNodeResponse.model_rebuild()

class HierarchyResponse(BaseModel):
    document_id: Optional[int] = None
    nodes: List[SectionNodeResponse] = []

class EditHistoryItem(BaseModel):
    id: int
    prompt: str
    sections_updated: List[Dict[str, Any]] = []
    summary_of_changes: List[str] = []
    created_at: Optional[str] = None

class SummaryResponse(BaseModel):
    summary: str

class ErrorDetail(BaseModel):
    title: str
    description: str
