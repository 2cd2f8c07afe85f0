"""Отдельная кнопка inline-клавиатуры: тип, подпись, условия показа и callback_data."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog
from aiogram.types import InlineKeyboardButton, WebAppInfo

from menugrid.config import settings
from menugrid.exceptions import InvalidButtonError
from menugrid.keyboards.tokens import CallbackTokenFactory, default_token_factory
from menugrid.utils.callables import resolve


if TYPE_CHECKING:
    from menugrid.menu.api import MenuApi
    from menugrid.menu.context import MenuContext
    from menugrid.types import Handler, Label, Predicate


logger = structlog.get_logger(__name__)


class ButtonType(str, Enum):
    """Тип кнопки."""

    ACTION = 'action'  # callback_data, обрабатывается меню
    URL = 'url'  # Внешняя ссылка
    WEB_APP = 'web_app'  # Telegram Mini App
    PLACEHOLDER = 'placeholder'  # Маркер динамического слота, никогда не рендерится


def _always(ctx: Any) -> bool:
    return True


@dataclass(slots=True)
class Requirement:
    """Условие доступности кнопки и реакция на его провал."""

    check: Predicate = _always
    disable: bool = False
    on_disabled: Handler | None = None
    hide: bool = False


class Button:
    def __init__(
        self,
        label: Label,
        type: ButtonType | str | None = None,
        *,
        url: str | None = None,
        handler: Handler | None = None,
        requirement: Requirement | None = None,
        token: str | None = None,
        slot_id: str | None = None,
        tokens: CallbackTokenFactory | None = None,
    ):
        if not type:
            raise InvalidButtonError('Button type is required.')
        try:
            self.type = ButtonType(type)
        except ValueError as error:
            raise InvalidButtonError(f'Unknown button type: {type!r}') from error

        if self.type in (ButtonType.URL, ButtonType.WEB_APP):
            if not url:
                raise InvalidButtonError(f'{self.type.value} button requires url.')
        elif url:
            raise InvalidButtonError(f'{self.type.value} button does not accept url.')

        if self.type is ButtonType.PLACEHOLDER:
            if not slot_id:
                raise InvalidButtonError('placeholder button requires slot_id.')
            handler = None
            requirement = Requirement(hide=True)

        if requirement is None:
            requirement = Requirement()
        elif not isinstance(requirement, Requirement):
            raise InvalidButtonError('requirement must be a Requirement instance.')

        self._label = label
        self.url = url
        self.handler = handler
        self.requirement = requirement
        self.slot_id = slot_id
        self._is_disabled = False
        self._is_hidden = self.type is ButtonType.PLACEHOLDER

        # Ссылки тоже получают токен: заблокированная ссылка рендерится как callback-кнопка
        if self.type is ButtonType.PLACEHOLDER:
            self.token = None
        else:
            self.token = token or (tokens or default_token_factory).next()

    @classmethod
    def action(
        cls,
        label: Label,
        handler: Handler | None = None,
        requirement: Requirement | None = None,
        **kwargs: Any,
    ) -> Button:
        return cls(label, ButtonType.ACTION, handler=handler, requirement=requirement, **kwargs)

    @classmethod
    def link(cls, label: Label, url: str, requirement: Requirement | None = None, **kwargs: Any) -> Button:
        return cls(label, ButtonType.URL, url=url, requirement=requirement, **kwargs)

    @classmethod
    def web_app(cls, label: Label, url: str, requirement: Requirement | None = None, **kwargs: Any) -> Button:
        return cls(label, ButtonType.WEB_APP, url=url, requirement=requirement, **kwargs)

    @classmethod
    def placeholder(cls, slot_id: str) -> Button:
        return cls(f'__placeholder_{slot_id}__', ButtonType.PLACEHOLDER, slot_id=slot_id)

    @property
    def raw_label(self) -> str | None:
        return None if callable(self._label) else self._label

    @property
    def is_placeholder(self) -> bool:
        return self.type is ButtonType.PLACEHOLDER

    @property
    def is_disabled(self) -> bool:
        return self._is_disabled

    @property
    def is_hidden(self) -> bool:
        return self._is_hidden

    def resolve_label(self, ctx: MenuContext | None) -> str:
        if callable(self._label):
            return self._label(ctx)
        return self._label

    async def evaluate_requirement(self, ctx: MenuContext | None) -> bool:
        """Пересчитывает флаги disabled/hidden и возвращает результат проверки."""
        if self.is_placeholder:
            self._is_hidden = True
            return False

        passed = bool(await resolve(self.requirement.check(ctx)))
        self._is_disabled = not passed and self.requirement.disable
        self._is_hidden = not passed and self.requirement.hide
        return passed

    async def invoke(self, ctx: MenuContext | None, api: MenuApi) -> Any:
        """
        Выполняет обработчик кнопки, если условие выполнено,
        иначе обработчик заблокированной кнопки.
        Ошибки обработчиков логируются и не пробрасываются.
        """
        passed = await self.evaluate_requirement(ctx)

        if passed and self.handler is not None:
            try:
                return await resolve(self.handler(ctx, api))
            except Exception as error:
                logger.exception('Ошибка в обработчике кнопки', token=self.token, error=error)
        elif self._is_disabled and self.requirement.on_disabled is not None:
            try:
                return await resolve(self.requirement.on_disabled(ctx, api))
            except Exception as error:
                logger.exception('Ошибка в обработчике заблокированной кнопки', token=self.token, error=error)
        return None

    def to_wire(self, ctx: MenuContext | None) -> InlineKeyboardButton | None:
        if self._is_hidden or self.is_placeholder:
            return None

        if self._is_disabled:
            return InlineKeyboardButton(
                text=f'{self.resolve_label(ctx)}{settings.LOCKED_MARKER}',
                callback_data=self.token,
            )

        text = self.resolve_label(ctx)
        if self.type is ButtonType.URL:
            return InlineKeyboardButton(text=text, url=self.url)
        if self.type is ButtonType.WEB_APP:
            return InlineKeyboardButton(text=text, web_app=WebAppInfo(url=self.url))
        return InlineKeyboardButton(text=text, callback_data=self.token)

    def __repr__(self) -> str:
        return f'Button({self.type.value}, label={self._label!r}, token={self.token!r})'
