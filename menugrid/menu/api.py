from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from menugrid.menu.context import MenuContext
    from menugrid.menu.menu import Menu
    from menugrid.menu.session import RenderSession


class MenuApi:
    """Навигация и обновление, доступные обработчику кнопки.

    Привязан к меню, которому принадлежит нажатая кнопка, даже если
    маршрутизацию запустил middleware другого меню.
    """

    def __init__(self, menu: Menu, session: RenderSession):
        self.menu = menu
        self.session = session

    @property
    def context(self) -> MenuContext | None:
        return self.session.context

    async def update(self) -> bool:
        return await self.menu.render(self.session)

    async def navigate(self, menu_id: str, payload: Any = None) -> bool:
        return await self.menu.navigate(self.session, menu_id, payload)

    async def back(self, menu_id: str | None = None, payload: Any = None) -> bool:
        return await self.menu.navigate(self.session, menu_id or self.menu.parent_id, payload)

    def get_payload(self) -> Any:
        return self.session.payload
