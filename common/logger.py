# logger.py
"""
레시피 서비스 로거 팩토리
- 콘솔 출력만 사용 (레벨별 색상)
- LOG_JSON_FORMAT=true 이면 한 줄 JSON 으로 출력, log_with_context 의 필드를 함께 기록
"""
import json
import logging
import os
from datetime import datetime, timezone

CONSOLE_FORMAT = '[%(asctime)s] %(levelname)s - %(name)s - %(message)s'

LEVEL_COLORS = {
    logging.DEBUG: '\033[36m',
    logging.INFO: '\033[32m',
    logging.WARNING: '\033[33m',
    logging.ERROR: '\033[31m',
    logging.CRITICAL: '\033[35m',
}
RESET_COLOR = '\033[0m'

# DB 드라이버/ORM 로그는 경고 이상만
QUIET_LOGGERS = ('sqlalchemy', 'aiosqlite', 'asyncpg')

class ColoredFormatter(logging.Formatter):
    """레벨명에만 색상을 입히는 콘솔 포맷터"""

    def format(self, record):
        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        plain = record.levelname
        record.levelname = f"{color}{plain}{RESET_COLOR}"
        try:
            return super().format(record)
        finally:
            # 같은 레코드를 받는 다른 핸들러에는 원래 레벨명 전달
            record.levelname = plain

class JSONFormatter(logging.Formatter):
    """레코드 하나를 JSON 한 줄로 직렬화"""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update(getattr(record, 'extra_fields', {}))
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)

def get_logger(name: str = "gecko_recipes", level: str = "INFO", enable_json_format: bool = False) -> logging.Logger:
    """
    이름별 logger 반환 (최초 호출 시에만 핸들러 등록)

    Args:
        name: 로거 이름
        level: 로그 레벨 문자열 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_json_format: True 면 JSONFormatter, 아니면 ColoredFormatter
    """
    for quiet in QUIET_LOGGERS:
        logging.getLogger(quiet).setLevel(logging.WARNING)

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if enable_json_format else ColoredFormatter(CONSOLE_FORMAT))
    logger.addHandler(handler)
    return logger

def log_with_context(logger: logging.Logger, level: str, message: str, **context):
    """context 키워드는 JSON 로그에서 최상위 필드로 출력"""
    logger.log(getattr(logging, level.upper(), logging.INFO), message, extra={'extra_fields': context})

def get_logger_from_env(name: str = "gecko_recipes") -> logging.Logger:
    """LOG_LEVEL, LOG_JSON_FORMAT 환경 변수 기준 logger"""
    return get_logger(
        name=name,
        level=os.getenv("LOG_LEVEL", "INFO"),
        enable_json_format=os.getenv("LOG_JSON_FORMAT", "false").lower() == "true",
    )
