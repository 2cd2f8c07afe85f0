"""
Состояние рендера, привязанное к чату.

Контекст, payload, id сообщения и способ его редактирования живут в сессии
конкретного чата, а не в глобальном реестре: два чата, обрабатываемые
одновременно, не портят состояние друг друга. Внутри одного чата
взаимодействия сериализуются через ``RenderSession.lock``.
"""

from __future__ import annotations

import asyncio
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any

import structlog

from menugrid.config import settings
from menugrid.keyboards.grid import ButtonGrid
from menugrid.menu.context import ContentKind, MenuContext


logger = structlog.get_logger(__name__)


@dataclass
class RenderSession:
    chat_id: int | None
    context: MenuContext | None = None
    payload: Any = None
    message_id: int | None = None
    content_kind: ContentKind = ContentKind.TEXT
    # menu_id → последняя отрендеренная сетка, по ней идёт маршрутизация нажатий
    rendered_grids: dict[str, ButtonGrid] = field(default_factory=dict)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def bind(
        self,
        context: MenuContext | None,
        message_id: int | None = None,
        content_kind: ContentKind | None = None,
    ) -> MenuContext | None:
        self.context = context
        if message_id:
            self.message_id = message_id
        if content_kind:
            self.content_kind = content_kind
        return self.context

    def set_payload(self, payload: Any) -> Any:
        self.payload = payload
        return self.payload


class SessionStore:
    """In-memory хранилище сессий по chat_id с вытеснением самых старых."""

    def __init__(self, max_size: int | None = None):
        self.max_size = settings.SESSION_CACHE_SIZE if max_size is None else max_size
        self._sessions: OrderedDict[int | None, RenderSession] = OrderedDict()

    def get(self, chat_id: int | None) -> RenderSession:
        session = self._sessions.get(chat_id)
        if session is None:
            session = RenderSession(chat_id=chat_id)
            self._sessions[chat_id] = session
            self._evict()
        else:
            self._sessions.move_to_end(chat_id)
        return session

    def drop(self, chat_id: int | None) -> None:
        self._sessions.pop(chat_id, None)

    def _evict(self) -> None:
        if not self.max_size:
            return
        for chat_id in list(self._sessions)[:-1]:
            if len(self._sessions) <= self.max_size:
                break
            if self._sessions[chat_id].lock.locked():
                continue
            del self._sessions[chat_id]
            logger.debug('Сессия меню вытеснена из кэша', chat_id=chat_id)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


session_store = SessionStore()
