from __future__ import annotations

from collections.abc import Awaitable, Callable
from time import monotonic
from typing import TYPE_CHECKING, Any

import structlog
from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, TelegramObject
from structlog.contextvars import bound_contextvars

from menugrid.config import settings
from menugrid.menu.context import MenuContext, detect_content_kind
from menugrid.menu.session import SessionStore, session_store


if TYPE_CHECKING:
    from menugrid.menu.menu import Menu


logger = structlog.get_logger(__name__)


class MenuRouterMiddleware(BaseMiddleware):
    """Передаёт нажатия inline-кнопок тем кнопкам меню, которые их отрисовали.

    Подключается как ``dp.callback_query.outer_middleware(menu.middleware())``.
    """

    def __init__(self, menu: Menu, *, sessions: SessionStore | None = None):
        self.menu = menu
        self.sessions = sessions if sessions is not None else session_store

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        if not isinstance(event, CallbackQuery):
            return await handler(event, data)

        self.menu.registry.register(self.menu)
        context = MenuContext.from_event(event, data)
        if context.chat_id is None:
            return await handler(event, data)

        ctx: dict[str, Any] = {'chat_id': context.chat_id, 'menu_id': self.menu.menu_id}
        if event.from_user:
            ctx['user_id'] = event.from_user.id

        with bound_contextvars(**ctx):
            start_time = monotonic()
            session = self.sessions.get(context.chat_id)

            async with session.lock:
                message = event.message
                session.bind(
                    context,
                    message_id=message.message_id if message is not None else None,
                    content_kind=detect_content_kind(message),
                )
                await self.menu.evaluate(session)

                if event.data:
                    await self.menu.registry.route(session, event.data)
                    try:
                        await event.answer()
                    except Exception as error:
                        logger.debug('Не удалось ответить на callback', error=error)

            execution_time = monotonic() - start_time
            if execution_time > settings.SLOW_INTERACTION_SECONDS:
                logger.warning('⏱️ Медленная обработка нажатия', execution_time=round(execution_time, 2))

        return await handler(event, data)
