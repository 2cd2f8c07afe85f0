"""
Меню и его окружение.

Структура модуля:
- context.py - MenuContext и тип сообщения (текст / медиа)
- session.py - состояние рендера для конкретного чата
- registry.py - каталог меню и маршрутизация нажатий
- api.py - MenuApi, который получают обработчики кнопок
- menu.py - Menu: построение и рендер
"""

from .api import MenuApi
from .context import ContentKind, MenuContext, detect_content_kind
from .menu import DynamicSlot, Menu
from .registry import MenuRegistry, menu_registry
from .session import RenderSession, SessionStore, session_store


__all__ = [
    'ContentKind',
    'DynamicSlot',
    'Menu',
    'MenuApi',
    'MenuContext',
    'MenuRegistry',
    'RenderSession',
    'SessionStore',
    'detect_content_kind',
    'menu_registry',
    'session_store',
]
