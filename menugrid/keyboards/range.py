from __future__ import annotations

from typing import TYPE_CHECKING, Any

from menugrid.keyboards.button import Button, Requirement
from menugrid.keyboards.grid import ButtonGrid
from menugrid.keyboards.tokens import CallbackTokenFactory
from menugrid.utils.callables import resolve


if TYPE_CHECKING:
    from menugrid.menu.api import MenuApi
    from menugrid.menu.context import MenuContext
    from menugrid.types import Handler, Label


class ButtonBuilderMixin:
    """Общий словарь построения клавиатуры для Menu и MenuRange.

    Ожидает у наследника ``_grid`` (куда складываются кнопки) и ``_tokens``
    (откуда берутся callback_data).
    """

    _grid: ButtonGrid
    _tokens: CallbackTokenFactory

    def add_action(self, label: Label, handler: Handler | None = None, requirement: Requirement | None = None):
        self._grid.append(Button.action(label, handler, requirement, tokens=self._tokens))
        return self

    def add_link(self, label: Label, url: str, requirement: Requirement | None = None):
        self._grid.append(Button.link(label, url, requirement, tokens=self._tokens))
        return self

    def add_web_app(self, label: Label, url: str, requirement: Requirement | None = None):
        self._grid.append(Button.web_app(label, url, requirement, tokens=self._tokens))
        return self

    def new_row(self):
        self._grid.new_row()
        return self

    def add_submenu(self, label: Label, menu_id: str, payload: Any = None):
        async def open_submenu(ctx: MenuContext, api: MenuApi) -> None:
            resolved = await resolve(payload(ctx, api)) if callable(payload) else payload
            await api.navigate(menu_id, resolved)

        return self.add_action(label, open_submenu)


class MenuRange(ButtonBuilderMixin):
    """Временный построитель, который получает генератор динамического слота."""

    def __init__(self, grid: ButtonGrid, tokens: CallbackTokenFactory):
        self._grid = grid
        self._tokens = tokens

    @property
    def grid(self) -> ButtonGrid:
        return self._grid
