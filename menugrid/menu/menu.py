"""
Меню: статическая раскладка кнопок, подпись и динамические слоты.

Построение происходит один раз при объявлении меню. При каждом рендере
генераторы динамических слотов вызываются заново, их кнопки вставляются
на место плейсхолдеров статической сетки, после чего условия всех кнопок
пересчитываются и сообщение редактируется.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import InlineKeyboardMarkup

from menugrid.config import settings
from menugrid.exceptions import InvalidMenuError
from menugrid.keyboards.button import Button
from menugrid.keyboards.grid import ButtonGrid
from menugrid.keyboards.range import ButtonBuilderMixin, MenuRange
from menugrid.keyboards.tokens import CallbackTokenFactory
from menugrid.menu.context import ContentKind
from menugrid.menu.registry import MenuRegistry, menu_registry
from menugrid.utils.callables import resolve


if TYPE_CHECKING:
    from menugrid.menu.api import MenuApi
    from menugrid.menu.context import MenuContext
    from menugrid.menu.session import RenderSession, SessionStore
    from menugrid.middlewares.menu_router import MenuRouterMiddleware
    from menugrid.types import Caption, DynamicGenerator, Label


logger = structlog.get_logger(__name__)

_DEFAULT = object()


@dataclass(slots=True)
class DynamicSlot:
    slot_id: str
    generator: DynamicGenerator


class Menu(ButtonBuilderMixin):
    def __init__(self, menu_id: str | None = None, *, registry: MenuRegistry | None = None):
        if not menu_id:
            raise InvalidMenuError('Menu ID is required.')
        if ':' in menu_id:
            raise InvalidMenuError(f'Menu ID must not contain ":": {menu_id!r}')

        self.menu_id = menu_id
        self.parent_id: str | None = None
        self.registry = registry if registry is not None else menu_registry
        self._grid = ButtonGrid()
        self._tokens = CallbackTokenFactory(menu_id)
        self._dynamic_slots: list[DynamicSlot] = []
        self._caption: Caption = None
        self._parse_mode: str | None = settings.DEFAULT_PARSE_MODE

    @property
    def grid(self) -> ButtonGrid:
        return self._grid

    @property
    def parse_mode(self) -> str | None:
        return self._parse_mode

    # --- Построение ---

    def add_back(self, label: Label, menu_id: str | None = None, payload: Any = None):
        async def go_back(ctx: MenuContext, api: MenuApi) -> None:
            target = menu_id or self.parent_id
            resolved = await resolve(payload(ctx, api)) if callable(payload) else payload
            await api.navigate(target, resolved)

        return self.add_action(label, go_back)

    def dynamic(self, generator: DynamicGenerator):
        """Резервирует место под кнопки, которые генератор создаст при рендере."""
        slot_id = f'dynamic_{len(self._dynamic_slots)}'
        self._dynamic_slots.append(DynamicSlot(slot_id=slot_id, generator=generator))
        self._grid.append(Button.placeholder(slot_id))
        return self

    def set_caption(self, caption: Caption, parse_mode: str | None | object = _DEFAULT):
        self._caption = caption
        self._parse_mode = settings.DEFAULT_PARSE_MODE if parse_mode is _DEFAULT else parse_mode
        return self

    def register(self, submenu: Menu) -> bool:
        submenu.parent_id = self.menu_id
        return self.registry.register(submenu)

    def caption_for(self, session: RenderSession) -> str | None:
        if callable(self._caption):
            return self._caption(session.context, session.payload)
        return self._caption

    # --- Рендер ---

    async def evaluate(self, session: RenderSession) -> ButtonGrid:
        ctx = session.context
        payload = session.payload

        generated: dict[str, ButtonGrid] = {}
        for slot in self._dynamic_slots:
            slot_grid = ButtonGrid()
            await resolve(slot.generator(ctx, MenuRange(slot_grid, self._tokens.scoped(slot.slot_id)), payload))
            generated[slot.slot_id] = slot_grid

        merged = ButtonGrid()
        static_rows = self._grid.rows
        for row_index, row in enumerate(static_rows):
            for button in row:
                if button.is_placeholder:
                    slot_grid = generated.get(button.slot_id)
                    if slot_grid is None:
                        continue
                    slot_rows = slot_grid.rows
                    for slot_row_index, slot_row in enumerate(slot_rows):
                        for slot_button in slot_row:
                            merged.append(slot_button)
                        if slot_row_index < len(slot_rows) - 1:
                            merged.new_row()
                else:
                    # Флаги рендера хранятся в копии, статическая кнопка общая для всех чатов
                    merged.append(copy.copy(button))

            if row_index < len(static_rows) - 1:
                merged.new_row()

        await merged.evaluate_all(ctx)
        session.rendered_grids[self.menu_id] = merged
        return merged

    def to_markup(self, session: RenderSession) -> InlineKeyboardMarkup:
        grid = session.rendered_grids.get(self.menu_id)
        if grid is None:
            grid = self._grid
        return grid.to_markup(session.context)

    async def markup(self, session: RenderSession) -> InlineKeyboardMarkup:
        await self.evaluate(session)
        return self.to_markup(session)

    async def navigate(self, session: RenderSession, menu_id: str | None, payload: Any = None) -> bool:
        menu = self.registry.get(menu_id)
        session.set_payload(payload)
        return await menu.render(session)

    async def render(self, session: RenderSession) -> bool:
        """Пересобирает меню и редактирует сообщение, в котором оно показано.

        Сначала пробует способ, соответствующий типу сообщения (текст или
        подпись к медиа), при ошибке пробует другой. Ошибки Telegram не
        пробрасываются: неудачное обновление не должно прерывать обработку.
        """
        await self.evaluate(session)

        ctx = session.context
        if ctx is None or ctx.bot is None or ctx.chat_id is None:
            logger.error('Некорректный контекст для обновления меню', menu_id=self.menu_id)
            return False

        if not session.message_id:
            logger.error('Нет ID сообщения для обновления меню', menu_id=self.menu_id)
            return False

        caption = self.caption_for(session)
        markup = self.to_markup(session)

        if caption is None:
            try:
                await ctx.bot.edit_message_reply_markup(
                    chat_id=ctx.chat_id,
                    message_id=session.message_id,
                    reply_markup=markup,
                )
                return True
            except Exception as error:
                if _is_not_modified(error):
                    return True
                logger.error('Ошибка обновления клавиатуры меню', menu_id=self.menu_id, error=error)
                return False

        primary = session.content_kind
        fallback = ContentKind.TEXT if primary is ContentKind.MEDIA else ContentKind.MEDIA

        try:
            await self._edit(ctx, session.message_id, primary, caption, markup)
            return True
        except Exception as error:
            if _is_not_modified(error):
                return True
            logger.debug('Не удалось отредактировать меню, пробуем другой способ', kind=primary.value, error=error)

        try:
            await self._edit(ctx, session.message_id, fallback, caption, markup)
        except Exception as error:
            if _is_not_modified(error):
                return True
            logger.error('Оба способа обновления меню не сработали', menu_id=self.menu_id, error=error)
            return False

        session.content_kind = fallback
        return True

    async def _edit(
        self,
        ctx: MenuContext,
        message_id: int,
        kind: ContentKind,
        caption: str,
        markup: InlineKeyboardMarkup,
    ) -> None:
        edit_kwargs = {
            'chat_id': ctx.chat_id,
            'message_id': message_id,
            'parse_mode': self._parse_mode,
            'reply_markup': markup,
        }

        if kind is ContentKind.MEDIA:
            await ctx.bot.edit_message_caption(caption=caption, **edit_kwargs)
        else:
            await ctx.bot.edit_message_text(text=caption, **edit_kwargs)

    def middleware(self, sessions: SessionStore | None = None) -> MenuRouterMiddleware:
        from menugrid.middlewares.menu_router import MenuRouterMiddleware

        return MenuRouterMiddleware(self, sessions=sessions)

    def __repr__(self) -> str:
        return f'Menu({self.menu_id!r}, parent_id={self.parent_id!r})'


def _is_not_modified(error: Exception) -> bool:
    return isinstance(error, TelegramBadRequest) and 'message is not modified' in (error.message or '').lower()
