"""Настройка structlog поверх stdlib logging для приложений, использующих меню."""

from __future__ import annotations

import logging
import sys

import structlog

from menugrid.config import settings


_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt='iso', utc=True),
]


def configure_logging(
    *,
    level: str | int | None = None,
    json: bool | None = None,
    force: bool = False,
) -> None:
    """Подключает общий форматтер к root-логгеру и настраивает structlog.

    Повторный вызов без ``force`` не трогает уже настроенные обработчики.
    """
    if level is None:
        resolved_level = settings.get_log_level()
    elif isinstance(level, int):
        resolved_level = level
    else:
        resolved_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    use_json = settings.LOG_JSON if json is None else json
    renderer: structlog.types.Processor
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    root_logger = logging.getLogger()
    if not root_logger.handlers or force:
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=_SHARED_PROCESSORS,
        )
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        if force:
            root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(resolved_level)

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
