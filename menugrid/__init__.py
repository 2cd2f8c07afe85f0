"""
menugrid - конструктор inline-меню для aiogram.

- Menu - объявление экрана: кнопки, строки, подменю, динамические слоты, подпись
- MenuRouterMiddleware - маршрутизация нажатий к кнопкам всех зарегистрированных меню
- RenderSession / SessionStore - состояние рендера отдельного чата
"""

from .config import Settings, settings
from .exceptions import InvalidButtonError, InvalidMenuError, MenuError, MenuNotFoundError
from .keyboards import Button, ButtonGrid, ButtonType, CallbackTokenFactory, MenuRange, Requirement
from .menu import (
    ContentKind,
    Menu,
    MenuApi,
    MenuContext,
    MenuRegistry,
    RenderSession,
    SessionStore,
    menu_registry,
    session_store,
)
from .middlewares import MenuRouterMiddleware


__all__ = [
    'Button',
    'ButtonGrid',
    'ButtonType',
    'CallbackTokenFactory',
    'ContentKind',
    'InvalidButtonError',
    'InvalidMenuError',
    'Menu',
    'MenuApi',
    'MenuContext',
    'MenuError',
    'MenuNotFoundError',
    'MenuRange',
    'MenuRegistry',
    'MenuRouterMiddleware',
    'RenderSession',
    'Requirement',
    'SessionStore',
    'Settings',
    'menu_registry',
    'session_store',
    'settings',
]
