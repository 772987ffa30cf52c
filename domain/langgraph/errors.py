"""
BRD 편집기 예외 정의

모든 예외는 사용자에게 보여줄 짧은 제목(title)과 설명(description)을 가집니다.
"""
from typing import Optional


class BRDError(Exception):
    """BRD 처리 기본 예외"""

    title = "BRD processing failed"

    def __init__(self, description: str, title: Optional[str] = None):
        super().__init__(description)
        self.description = description
        if title is not None:
            self.title = title


class CollaboratorUnavailable(BRDError):
    """외부 협력 시스템(LLM, 저장소) 사용 불가 또는 잘못된 응답"""

    title = "External service unavailable"


class LLMRetryExhausted(CollaboratorUnavailable):
    """재시도 횟수를 모두 소진한 LLM 호출"""

    title = "AI service unavailable"

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None):
        super().__init__(f"LLM request failed after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


class StoreUnavailable(CollaboratorUnavailable):
    """데이터베이스 오류"""

    title = "Document store unavailable"


class InvalidRequest(BRDError):
    """잘못된 요청 (빈 프롬프트 등)"""

    title = "Invalid request"


class DocumentNotFound(BRDError):
    """존재하지 않는 문서"""

    title = "Document not found"

    def __init__(self, document_id: int):
        super().__init__(f"Document not found: {document_id}")
        self.document_id = document_id


def error_kind(exc: BaseException) -> str:
    """예외 → 워크플로우/라우터용 분류"""
    if isinstance(exc, DocumentNotFound):
        return "not_found"
    if isinstance(exc, InvalidRequest):
        return "invalid"
    if isinstance(exc, LLMRetryExhausted):
        return "llm"
    if isinstance(exc, StoreUnavailable):
        return "store"
    if isinstance(exc, CollaboratorUnavailable):
        return "collaborator"
    return "internal"


def record_failure(state: dict, stage: str, exc: BaseException) -> dict:
    """노드 실패를 상태에 기록 (예외는 다시 던지지 않음)"""
    if isinstance(exc, BRDError):
        state["error_title"] = exc.title
        state["error"] = exc.description
    else:
        state["error_title"] = f"{stage} failed"
        state["error"] = f"{stage} failed: {exc}"
    state["error_kind"] = error_kind(exc)
    state["status"] = "error"
    return state
