"""Каталог объявленных меню и маршрутизация нажатий по callback_data."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import structlog

from menugrid.exceptions import MenuNotFoundError
from menugrid.menu.api import MenuApi


if TYPE_CHECKING:
    from menugrid.keyboards.button import Button
    from menugrid.menu.menu import Menu
    from menugrid.menu.session import RenderSession


logger = structlog.get_logger(__name__)


class MenuRegistry:
    def __init__(self):
        self._menus: dict[str, Menu] = {}

    def register(self, menu: Menu) -> bool:
        """
        Регистрирует меню. Повторная регистрация того же id игнорируется:
        остаётся первое объявление.
        """
        if menu is None or not isinstance(getattr(menu, 'menu_id', None), str):
            raise TypeError('Only instances of Menu can be added.')

        if menu.menu_id in self._menus:
            if self._menus[menu.menu_id] is not menu:
                logger.debug('Меню уже зарегистрировано, повторная регистрация пропущена', menu_id=menu.menu_id)
            return False

        self._menus[menu.menu_id] = menu
        return True

    def get(self, menu_id: str | None) -> Menu:
        menu = self._menus.get(menu_id) if menu_id is not None else None
        if menu is None:
            raise MenuNotFoundError(menu_id)
        return menu

    @property
    def menus(self) -> dict[str, Menu]:
        return dict(self._menus)

    def find_button(self, session: RenderSession, token: str) -> tuple[Menu, Button] | None:
        # Ищем только в отрендеренных для этого чата сетках, в порядке регистрации меню
        for menu_id, menu in self._menus.items():
            grid = session.rendered_grids.get(menu_id)
            if grid is None:
                continue
            button = grid.find(token)
            if button is not None:
                return menu, button
        return None

    async def route(self, session: RenderSession, token: str) -> bool:
        found = self.find_button(session, token)
        if found is None:
            logger.info('Кнопка для callback_data не найдена', token=token, chat_id=session.chat_id)
            return False

        menu, button = found
        logger.debug('Нажатие передано кнопке', token=token, menu_id=menu.menu_id)
        await button.invoke(session.context, MenuApi(menu, session))
        return True

    def __contains__(self, menu_id: object) -> bool:
        return menu_id in self._menus

    def __iter__(self) -> Iterator[Menu]:
        return iter(list(self._menus.values()))

    def __len__(self) -> int:
        return len(self._menus)


menu_registry = MenuRegistry()
