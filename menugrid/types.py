"""Сигнатуры пользовательских колбэков, которые принимает конструктор меню."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Union


if TYPE_CHECKING:
    from menugrid.keyboards.range import MenuRange
    from menugrid.menu.api import MenuApi
    from menugrid.menu.context import MenuContext


LabelFunc = Callable[['MenuContext'], str]
Label = Union[str, LabelFunc]

Predicate = Callable[['MenuContext'], Union[bool, Awaitable[bool]]]
Handler = Callable[['MenuContext', 'MenuApi'], Any]
PayloadFactory = Callable[['MenuContext', 'MenuApi'], Any]

CaptionFunc = Callable[['MenuContext', Any], str]
Caption = Union[str, CaptionFunc, None]

DynamicGenerator = Callable[['MenuContext', 'MenuRange', Any], Union[None, Awaitable[None]]]
