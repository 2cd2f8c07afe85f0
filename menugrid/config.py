"""Настройки библиотеки меню, читаются из переменных окружения с префиксом MENUGRID_."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Отображение кнопок
    LOCKED_MARKER: str = ' 🔒'
    DEFAULT_PARSE_MODE: str = 'Markdown'

    # Telegram ограничивает callback_data 64 байтами
    CALLBACK_DATA_MAX_LENGTH: int = Field(default=64, ge=8, le=64)

    # Сессии рендера (0 = без ограничения)
    SESSION_CACHE_SIZE: int = Field(default=10_000, ge=0)
    SLOW_INTERACTION_SECONDS: float = Field(default=1.0, gt=0)

    # Логирование
    LOG_LEVEL: str = 'INFO'
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        env_prefix='MENUGRID_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    def get_log_level(self) -> int:
        value = (self.LOG_LEVEL or '').strip()
        if value.isdigit():
            return int(value)
        return logging.getLevelNamesMapping().get(value.upper(), logging.INFO)


settings = Settings()
