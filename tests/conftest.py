import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest


ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from menugrid.menu.context import MenuContext
from menugrid.menu.registry import MenuRegistry
from menugrid.menu.session import RenderSession, SessionStore


CHAT_ID = 4242
MESSAGE_ID = 777


@pytest.fixture
def registry() -> MenuRegistry:
    return MenuRegistry()


@pytest.fixture
def sessions() -> SessionStore:
    return SessionStore(max_size=0)


@pytest.fixture
def bot() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def context(bot) -> MenuContext:
    return MenuContext(bot=bot, chat_id=CHAT_ID)


@pytest.fixture
def session(context) -> RenderSession:
    render_session = RenderSession(chat_id=CHAT_ID)
    render_session.bind(context, message_id=MESSAGE_ID)
    return render_session


@pytest.fixture
def keyboard_texts():
    """Превращает клавиатуру в список строк с текстами кнопок."""

    def _texts(markup) -> list[list[str]]:
        return [[button.text for button in row] for row in markup.inline_keyboard]

    return _texts
