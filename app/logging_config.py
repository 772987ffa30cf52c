"""
로깅 설정 모듈

표준 logging 기반으로 text/JSON 포맷 출력을 설정하고,
BRD 이벤트, LLM 호출, 에러 기록용 헬퍼를 제공합니다.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

ROOT_LOGGER_NAME = "brd_editor"

# LogRecord 기본 속성 (extra 필드 구분용)
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """extra 필드를 포함한 JSON 한 줄 포맷"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """사람이 읽기 쉬운 포맷 (extra 필드는 key=value로 덧붙임)"""

    def __init__(self):
        super().__init__("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        ]
        if extras:
            base = f"{base} | {' '.join(extras)}"
        return base


def setup_logging(level: str = "INFO", fmt: str = "text") -> logging.Logger:
    """
    루트 애플리케이션 로거 설정

    Args:
        level: 로그 레벨 이름 (DEBUG, INFO, ...)
        fmt: "text" 또는 "json"
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # 중복 핸들러 방지
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if fmt.lower() == "json" else TextFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def setup_logging_from_env() -> logging.Logger:
    """app.config의 LOG_LEVEL / LOG_FORMAT으로 로깅 설정"""
    from app.config import LOG_FORMAT, LOG_LEVEL

    return setup_logging(LOG_LEVEL, LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """컴포넌트별 로거 반환 (brd_editor.<name>)"""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


_event_logger = get_logger("events")


def log_brd_event(event: str, document_id: Optional[int] = None, **context: Any) -> None:
    """문서 로드/수정/AI 편집 이벤트 기록"""
    _event_logger.info(
        f"BRD event: {event}",
        extra={"event": event, "document_id": document_id, **context},
    )


def log_llm_call(purpose: str, status: str, **context: Any) -> None:
    """LLM 호출 결과 기록 (purpose: summary, edit_plan 등)"""
    level = logging.INFO if status == "success" else logging.WARNING
    _event_logger.log(
        level,
        f"LLM call {purpose}: {status}",
        extra={"llm_purpose": purpose, "llm_status": status, **context},
    )


def log_error(message: str, exc: Optional[BaseException] = None, **context: Any) -> None:
    """에러 기록 (예외가 있으면 traceback 포함)"""
    _event_logger.error(
        f"{message}: {exc}" if exc else message,
        exc_info=exc,
        extra=context,
    )
