from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from menugrid.keyboards.button import Button


if TYPE_CHECKING:
    from menugrid.menu.context import MenuContext


class ButtonGrid:
    """Раскладка кнопок по строкам и её сериализация в inline-клавиатуру."""

    def __init__(self):
        self._rows: list[list[Button]] = [[]]

    @property
    def rows(self) -> list[list[Button]]:
        return [list(row) for row in self._rows]

    @property
    def is_empty(self) -> bool:
        return not any(self._rows)

    def append(self, button: Button) -> None:
        if not isinstance(button, Button):
            raise TypeError('Only instances of Button can be added.')
        self._rows[-1].append(button)

    def new_row(self) -> None:
        # Пустая строка не плодит ещё одну пустую
        if self._rows[-1]:
            self._rows.append([])

    def buttons(self) -> Iterator[Button]:
        for row in self._rows:
            yield from row

    def find(self, token: str) -> Button | None:
        for button in self.buttons():
            if button.token is not None and button.token == token:
                return button
        return None

    async def evaluate_all(self, ctx: MenuContext | None) -> None:
        for button in self.buttons():
            await button.evaluate_requirement(ctx)

    def to_rows(self, ctx: MenuContext | None) -> list[list[InlineKeyboardButton]]:
        keyboard = []
        for row in self._rows:
            row_data = [wire for wire in (button.to_wire(ctx) for button in row) if wire is not None]
            if row_data:
                keyboard.append(row_data)
        return keyboard

    def to_markup(self, ctx: MenuContext | None) -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup(inline_keyboard=self.to_rows(ctx))

    def __len__(self) -> int:
        return sum(len(row) for row in self._rows)
