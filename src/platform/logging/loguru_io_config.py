"""
Loguru sinks and stdlib bridging shared by the Logger.io decorator.

Every record carries the service context plus the call-chain fields that
Logger.io fills in; records coming from stdlib loggers get them empty.
"""

from contextvars import ContextVar
from enum import StrEnum
import logging
import os
from pathlib import Path
import sys

from loguru import logger as loguru_logger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


SENSITIVE_KEYWORDS = {'password', 'hashed_password', 'token', 'access_token', 'secret_key'}

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


io_log_format = (
    f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</> | <lvl>{{level:<8}}</> | '
    f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</> | '
    f'{{message}} | <lk>{{elapsed}}</> | <lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>'
)

loguru_logger.remove()
custom_logger = loguru_logger.bind(
    **{
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }
)


class InterceptHandler(logging.Handler):
    """Forward stdlib records (uvicorn, sqlalchemy, alembic) to loguru at the caller's frame."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def intercept_std_logging(*logger_names: str) -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)
    for name in logger_names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


def _add_sinks() -> None:
    level = 'DEBUG' if settings.DEBUG else 'INFO'
    custom_logger.add(sys.stdout, format=io_log_format, level=level, enqueue=True)

    # Production ships stdout; the hourly files are for local debugging and test runs
    if not settings.DEBUG:
        return
    test_log_dir = os.environ.get('TEST_LOG_DIR')
    log_dir = Path(test_log_dir) if test_log_dir else LOG_DIR
    prefix = 'test_' if test_log_dir else ''
    custom_logger.add(
        log_dir / f'{prefix}{{time:YYYY-MM-DD_HH}}.log',
        format=io_log_format,
        level=level,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
    )


_add_sinks()
