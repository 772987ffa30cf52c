"""
ChatOpenAI 인스턴스 생성
"""
from typing import Optional

from langchain_openai import ChatOpenAI

from app.config import OPENAI_API_KEY, OPENAI_MAX_TOKENS, OPENAI_MODEL, OPENAI_TEMPERATURE


def create_chat_llm(
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
) -> ChatOpenAI:
    """설정값 기반 ChatOpenAI 생성 (API 키가 없으면 ValueError)"""
    key = api_key or OPENAI_API_KEY
    if not key:
        raise ValueError("OPENAI_API_KEY is required (or set USE_MOCK_LLM=true)")

    return ChatOpenAI(
        api_key=key,
        model=model or OPENAI_MODEL,
        temperature=OPENAI_TEMPERATURE if temperature is None else temperature,
        max_tokens=OPENAI_MAX_TOKENS,
        # 재시도는 invoke_with_retry에서 처리
        max_retries=0,
    )
