"""Контекст входящего события, который получают подписи, условия и обработчики кнопок."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from aiogram import Bot
from aiogram.types import CallbackQuery, InaccessibleMessage, Message, TelegramObject, User


class ContentKind(str, Enum):
    """Как редактировать сообщение с меню."""

    TEXT = 'text'  # edit_message_text
    MEDIA = 'media'  # edit_message_caption


def detect_content_kind(message: Any) -> ContentKind | None:
    if message is None or isinstance(message, InaccessibleMessage):
        return None
    if getattr(message, 'text', None) is not None:
        return ContentKind.TEXT
    return ContentKind.MEDIA


@dataclass(slots=True)
class MenuContext:
    bot: Bot | None = None
    chat_id: int | None = None
    event: TelegramObject | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def callback_data(self) -> str | None:
        if isinstance(self.event, CallbackQuery):
            return self.event.data
        return None

    @property
    def message(self) -> Message | InaccessibleMessage | None:
        if isinstance(self.event, CallbackQuery):
            return self.event.message
        if isinstance(self.event, Message):
            return self.event
        return None

    @property
    def user(self) -> User | None:
        return getattr(self.event, 'from_user', None)

    @classmethod
    def from_event(cls, event: TelegramObject, data: dict[str, Any] | None = None) -> MenuContext:
        data = data or {}
        chat_id = None
        if isinstance(event, CallbackQuery):
            if event.message is not None:
                chat_id = event.message.chat.id
            elif event.from_user is not None:
                chat_id = event.from_user.id
        elif isinstance(event, Message):
            chat_id = event.chat.id

        bot = data.get('bot') or getattr(event, 'bot', None)
        return cls(bot=bot, chat_id=chat_id, event=event, data=data)
