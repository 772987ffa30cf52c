"""
Test configuration and fixtures
"""
import os
import tempfile

# 설정 모듈이 import되기 전에 테스트 환경 고정
os.environ.setdefault("USE_MOCK_LLM", "true")
os.environ.setdefault("LLM_BACKOFF_BASE_SECONDS", "0")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from database import Base
import models  # noqa: F401  모든 모델 등록
from domain.langgraph.brd_service import reset_brd_service
from domain.langgraph.brd_store import BRDStore


class FakeLLM:
    """ChatOpenAI 대용: invoke/ainvoke 호출을 기록하고 정해진 응답을 돌려줌"""

    class Resp:
        def __init__(self, text: str):
            self.content = text

    def __init__(self, responses=None, responder=None, fail_times=0, error=None):
        self.responses = list(responses or [])
        self.responder = responder
        self.fail_times = fail_times
        self.error = error or RuntimeError("rate limited")
        self.calls = []

    def _respond(self, messages):
        self.calls.append(messages)
        if self.fail_times:
            self.fail_times -= 1
            raise self.error
        if self.responder is not None:
            return self.Resp(self.responder(messages))
        if len(self.responses) > 1:
            return self.Resp(self.responses.pop(0))
        return self.Resp(self.responses[0] if self.responses else "")

    def invoke(self, messages):
        return self._respond(messages)

    async def ainvoke(self, messages):
        return self._respond(messages)


@pytest.fixture
def fake_llm():
    """FakeLLM 클래스 (테스트마다 원하는 응답으로 생성)"""
    return FakeLLM


@pytest.fixture
def session_factory():
    """Create a temporary SQLite database and return its session factory."""
    temp_db = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    temp_db.close()

    engine = create_engine(f"sqlite:///{temp_db.name}")
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    try:
        yield factory
    finally:
        engine.dispose()
        os.unlink(temp_db.name)


@pytest.fixture
def test_db_session(session_factory):
    """Create a test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(session_factory):
    return BRDStore(session_factory)


@pytest.fixture
def sample_brd():
    """Preamble + three top-level sections, one with subsections."""
    return (
        "Draft v0.3 - internal\n"
        "\n"
        "# Introduction\n"
        "This BRD describes the order portal.\n"
        "\n"
        "# Requirements\n"
        "## Functional\n"
        "Users can place orders.\n"
        "\n"
        "## Non-Functional\n"
        "Pages load in under two seconds.\n"
        "\n"
        "# Glossary\n"
        "BRD: Business Requirements Document\n"
    )


@pytest.fixture(autouse=True)
def reset_services():
    """Reset singleton services before each test."""
    reset_brd_service()
    yield
    reset_brd_service()
