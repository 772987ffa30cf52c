"""
LLM 호출 재시도 래퍼

레이트리밋/일시 장애에 대비해 지수 백오프로 재시도하고,
재시도를 모두 소진하면 LLMRetryExhausted를 발생시킵니다.
"""
import asyncio
import time
from typing import Any, Dict, List, Optional, Sequence, Union

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from app.config import LLM_BACKOFF_BASE_SECONDS, LLM_BACKOFF_MAX_SECONDS, LLM_MAX_RETRIES
from app.logging_config import get_logger, log_llm_call
from ..errors import LLMRetryExhausted

logger = get_logger("llm_backoff")

MessageLike = Union[BaseMessage, Dict[str, str]]

_ROLE_TO_MESSAGE = {
    "system": SystemMessage,
    "user": HumanMessage,
    "assistant": AIMessage,
}


def to_langchain_messages(messages: Sequence[MessageLike]) -> List[BaseMessage]:
    """{role, content} 딕셔너리를 langchain 메시지로 변환"""
    converted: List[BaseMessage] = []
    for message in messages:
        if isinstance(message, BaseMessage):
            converted.append(message)
            continue
        role = message.get("role", "user")
        message_cls = _ROLE_TO_MESSAGE.get(role)
        if message_cls is None:
            raise ValueError(f"Unknown message role: {role}")
        converted.append(message_cls(content=message.get("content", "")))
    return converted


def backoff_delay(attempt: int, base_delay: float = LLM_BACKOFF_BASE_SECONDS,
                  max_delay: float = LLM_BACKOFF_MAX_SECONDS) -> float:
    """attempt(0부터)번째 실패 후 대기 시간"""
    return min(base_delay * (2 ** attempt), max_delay)


def response_text(response: Any) -> str:
    """LLM 응답에서 텍스트 추출"""
    content = getattr(response, 'content', response)
    if isinstance(content, list):
        content = '\n'.join(str(c) for c in content)
    return str(content).strip()


def invoke_with_retry(
    llm: Any,
    messages: Sequence[MessageLike],
    max_retries: int = LLM_MAX_RETRIES,
    base_delay: float = LLM_BACKOFF_BASE_SECONDS,
    purpose: str = "completion",
) -> Any:
    """동기 호출 + 지수 백오프 재시도"""
    prepared = to_langchain_messages(messages)
    attempts = max(1, max_retries)
    last_error: Optional[BaseException] = None

    for attempt in range(attempts):
        try:
            response = llm.invoke(prepared)
            log_llm_call(purpose, "success", attempt=attempt + 1)
            return response
        except Exception as e:
            last_error = e
            log_llm_call(purpose, "retry" if attempt + 1 < attempts else "failed",
                         attempt=attempt + 1, error=str(e))
            if attempt + 1 < attempts:
                time.sleep(backoff_delay(attempt, base_delay))

    raise LLMRetryExhausted(attempts, last_error)


async def ainvoke_with_retry(
    llm: Any,
    messages: Sequence[MessageLike],
    max_retries: int = LLM_MAX_RETRIES,
    base_delay: float = LLM_BACKOFF_BASE_SECONDS,
    purpose: str = "completion",
) -> Any:
    """비동기 호출 + 지수 백오프 재시도"""
    prepared = to_langchain_messages(messages)
    attempts = max(1, max_retries)
    last_error: Optional[BaseException] = None

    for attempt in range(attempts):
        try:
            response = await llm.ainvoke(prepared)
            log_llm_call(purpose, "success", attempt=attempt + 1)
            return response
        except Exception as e:
            last_error = e
            log_llm_call(purpose, "retry" if attempt + 1 < attempts else "failed",
                         attempt=attempt + 1, error=str(e))
            if attempt + 1 < attempts:
                await asyncio.sleep(backoff_delay(attempt, base_delay))

    raise LLMRetryExhausted(attempts, last_error)


def complete(llm: Any, messages: Sequence[MessageLike], **kwargs: Any) -> str:
    """messages → 텍스트 (동기)"""
    return response_text(invoke_with_retry(llm, messages, **kwargs))


async def acomplete(llm: Any, messages: Sequence[MessageLike], **kwargs: Any) -> str:
    """messages → 텍스트 (비동기)"""
    return response_text(await ainvoke_with_retry(llm, messages, **kwargs))
