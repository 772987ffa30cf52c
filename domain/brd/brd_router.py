"""
# BRD Editor API

마크다운 BRD(Business Requirements Document)를 섹션 단위로 관리하는 API입니다.

## 주요 기능
- **문서 로드**: BRD 업로드 → 섹션 파싱 → 섹션별 AI 요약 → 저장
- **수동 편집**: 편집된 본문 저장 후 섹션 재계산 (기존 요약 유지)
- **AI 편집**: 자유 형식 요청 → LLM 편집 계획 → 대상 섹션만 교체
- **계층 구조**: 헤더 깊이 기준 섹션 트리 (표시용)
- **편집 이력**: AI 편집 요청/변경 요약 조회

## 에러 응답
모든 실패는 `detail`에 `{"title", "description"}`을 담아 반환합니다.
- `400`: 잘못된 요청
- `404`: 문서 없음
- `502`: AI 서비스 오류
- `503`: 저장소 오류
"""

from fastapi import APIRouter, Depends, HTTPException
from typing import Any, Dict, List

from .schema import (
    ContentRequest,
    DocumentContentUpdate,
    DocumentLoadRequest,
    DocumentResponse,
    EditHistoryItem,
    EditRequest,
    EditResponse,
    HierarchyResponse,
    SectionsResponse,
    SummaryResponse,
)
from domain.langgraph.brd_service import BRDService, get_brd_service
from domain.langgraph.brd_session import BRDSession
from domain.langgraph.errors import BRDError, error_kind
from domain.langgraph.nodes.update.section_parser import parse_markdown_sections
from app.logging_config import get_logger

logger = get_logger("brd_router")
router = APIRouter(
    prefix="/brd",
    tags=["BRD"],
    responses={
        404: {"description": "Document not found"},
        502: {"description": "AI service error"},
        503: {"description": "Document store error"},
    }
)

STATUS_BY_KIND = {
    "invalid": 400,
    "not_found": 404,
    "llm": 502,
    "collaborator": 502,
    "store": 503,
    "internal": 500,
}


def _http_error(kind: str, title: str, description: str) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_KIND.get(kind, 500),
        detail={"title": title, "description": description},
    )


def _raise_for_result(result: Dict[str, Any]) -> None:
    """서비스 실패 결과 → HTTPException"""
    if not result["success"]:
        raise _http_error(result.get("error_kind", "internal"), result["error_title"], result["error"])


def _open_session(service: BRDService, document_id: int) -> BRDSession:
    try:
        return service.open_session(document_id)
    except BRDError as e:
        raise _http_error(error_kind(e), e.title, e.description)


def _document_response(session: BRDSession) -> Dict[str, Any]:
    return session.to_dict()


@router.post(
    "/documents",
    response_model=DocumentResponse,
    status_code=201,
    summary="BRD 문서 로드",
    description="마크다운 BRD를 업로드하면 섹션으로 분리하고 섹션별 요약을 생성한 뒤 저장합니다.",
)
async def load_document(req: DocumentLoadRequest, service: BRDService = Depends(get_brd_service)):
    result = await service.load_document(req.content, req.filename)
    _raise_for_result(result)
    logger.info(f"Document loaded: {result['document_id']}")
    return _document_response(result["session"])


@router.get(
    "/documents/{document_id}",
    response_model=DocumentResponse,
    summary="문서 조회",
    description="현재 본문과 섹션(요약 포함)을 반환합니다.",
)
async def read_document(document_id: int, service: BRDService = Depends(get_brd_service)):
    session = _open_session(service, document_id)
    return _document_response(session)


@router.put(
    "/documents/{document_id}",
    response_model=DocumentResponse,
    summary="수정한 문서 저장",
    description="""
    사용자가 직접 수정한 본문(`content`)을 저장하고 섹션을 다시 계산합니다.
    요약은 새로 만들지 않고 같은 제목의 기존 섹션 요약을 이어받습니다.
    """
)
async def update_document(
        document_id: int,
        update_req: DocumentContentUpdate,
        service: BRDService = Depends(get_brd_service)
):
    session = _open_session(service, document_id)
    result = service.update_document(session, update_req.content)
    _raise_for_result(result)
    return _document_response(result["session"])


@router.post(
    "/documents/{document_id}/edit",
    response_model=EditResponse,
    summary="AI 편집 요청",
    description="""
    자유 형식 요청(`prompt`)을 받아 LLM이 수정할 섹션과 새 내용을 결정하고,
    해당 섹션만 교체합니다. 형식이 잘못된 LLM 응답은 변경 없이 처리되며
    `change_summary`에 이유가 담깁니다.
    """
)
async def request_edit(
        document_id: int,
        edit_req: EditRequest,
        service: BRDService = Depends(get_brd_service)
):
    session = _open_session(service, document_id)
    result = await service.request_edit(session, edit_req.prompt)
    _raise_for_result(result)

    response = _document_response(result["session"])
    response.update({
        "change_summary": result["change_summary"],
        "sections_updated": result["sections_updated"],
        "applied": result["applied"],
        "unmatched": result["unmatched"],
    })
    return response


@router.get(
    "/documents/{document_id}/sections",
    response_model=SectionsResponse,
    summary="섹션 목록 조회",
)
async def list_sections(document_id: int, service: BRDService = Depends(get_brd_service)):
    session = _open_session(service, document_id)
    return {"document_id": document_id, "sections": [s.to_dict() for s in session.sections]}


@router.get(
    "/documents/{document_id}/hierarchy",
    response_model=HierarchyResponse,
    summary="섹션 계층 구조",
    description="헤더 깊이를 기준으로 만든 표시용 섹션 트리입니다.",
)
async def get_hierarchy(document_id: int, service: BRDService = Depends(get_brd_service)):
    session = _open_session(service, document_id)
    return {"document_id": document_id, "nodes": service.get_hierarchy(session)}


@router.get(
    "/documents/{document_id}/edits",
    response_model=List[EditHistoryItem],
    summary="AI 편집 이력",
)
async def list_edits(document_id: int, service: BRDService = Depends(get_brd_service)):
    try:
        return service.store.list_edits(document_id)
    except BRDError as e:
        raise _http_error(error_kind(e), e.title, e.description)


@router.post(
    "/parse",
    response_model=SectionsResponse,
    summary="섹션 미리보기",
    description="저장 없이 본문을 섹션으로 파싱합니다.",
)
async def preview_sections(req: ContentRequest):
    return {"document_id": None, "sections": [s.to_dict() for s in parse_markdown_sections(req.content)]}


@router.post(
    "/summary",
    response_model=SummaryResponse,
    summary="본문 요약",
)
async def generate_summary(req: ContentRequest, service: BRDService = Depends(get_brd_service)):
    try:
        return {"summary": await service.summarize(req.content)}
    except BRDError as e:
        logger.error(f"Summary generation failed: {e}")
        raise _http_error(error_kind(e), e.title, e.description)
