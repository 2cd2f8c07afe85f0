"""Тесты каталога меню и маршрутизации нажатий."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from menugrid.exceptions import MenuNotFoundError
from menugrid.keyboards.button import Requirement
from menugrid.menu.menu import Menu
from menugrid.menu.registry import MenuRegistry


class TestMenuRegistry:
    def test_first_registration_wins(self, registry):
        first = Menu('main', registry=registry).add_action('old')
        second = Menu('main', registry=registry).add_action('new')

        assert registry.register(first) is True
        assert registry.register(second) is False

        assert registry.get('main') is first
        assert len(registry) == 1

    def test_unknown_menu_raises_not_found(self, registry):
        with pytest.raises(MenuNotFoundError) as exc_info:
            registry.get('missing')

        assert exc_info.value.menu_id == 'missing'

    def test_none_id_raises_not_found(self, registry):
        with pytest.raises(MenuNotFoundError):
            registry.get(None)

    def test_only_menus_can_be_registered(self, registry):
        with pytest.raises(TypeError):
            registry.register(SimpleNamespace(menu_id=1))
        with pytest.raises(TypeError):
            registry.register(None)

    def test_iteration_follows_registration_order(self, registry):
        for menu_id in ('c', 'a', 'b'):
            registry.register(Menu(menu_id, registry=registry))

        assert [menu.menu_id for menu in registry] == ['c', 'a', 'b']
        assert 'a' in registry
        assert list(registry.menus) == ['c', 'a', 'b']

    def test_menus_use_module_registry_by_default(self):
        from menugrid.menu.registry import menu_registry

        assert Menu('default-registry').registry is menu_registry


class TestRouting:
    async def test_token_routes_to_owning_menu(self, registry, session):
        first_handler = AsyncMock()
        second_handler = AsyncMock()
        first = Menu('first', registry=registry).add_action('One', first_handler)
        second = Menu('second', registry=registry).add_action('Two', second_handler)
        registry.register(first)
        registry.register(second)
        await first.evaluate(session)
        await second.evaluate(session)

        token = next(second.grid.buttons()).token
        assert await registry.route(session, token) is True

        first_handler.assert_not_awaited()
        second_handler.assert_awaited_once()
        ctx, api = second_handler.await_args.args
        assert ctx is session.context
        assert api.menu is second
        assert api.session is session

    async def test_unknown_token_is_ignored(self, registry, session):
        menu = Menu('main', registry=registry).add_action('A', AsyncMock())
        registry.register(menu)
        await menu.evaluate(session)

        assert await registry.route(session, 'nope') is False

    async def test_menus_not_rendered_in_session_are_skipped(self, registry, session):
        handler = AsyncMock()
        menu = Menu('main', registry=registry).add_action('A', handler)
        registry.register(menu)

        assert await registry.route(session, next(menu.grid.buttons()).token) is False
        handler.assert_not_awaited()

    async def test_routing_uses_rendered_dynamic_buttons(self, registry, session):
        clicked = []

        def generator(ctx, menu_range, payload):
            for item in payload:
                menu_range.add_action(item, lambda ctx, api, item=item: clicked.append(item))

        menu = Menu('main', registry=registry).dynamic(generator)
        registry.register(menu)
        session.set_payload(['a', 'b'])
        grid = await menu.evaluate(session)

        token = list(grid.buttons())[1].token
        await registry.route(session, token)

        assert clicked == ['b']

    async def test_first_match_wins_on_token_collision(self, registry, session):
        first_handler = AsyncMock()
        second_handler = AsyncMock()
        first = Menu('first', registry=registry).add_action('One', first_handler)
        registry.register(first)
        second = Menu('second', registry=registry).add_action('Two', second_handler)
        registry.register(second)
        await first.evaluate(session)
        await second.evaluate(session)

        for grid in session.rendered_grids.values():
            next(grid.buttons()).token = 'dup'

        await registry.route(session, 'dup')

        first_handler.assert_awaited_once()
        second_handler.assert_not_awaited()

    async def test_disabled_button_runs_disabled_handler(self, registry, session):
        handler = AsyncMock()
        on_disabled = AsyncMock()
        menu = Menu('main', registry=registry).add_action(
            'Оплатить',
            handler,
            Requirement(check=lambda ctx: False, disable=True, on_disabled=on_disabled),
        )
        registry.register(menu)
        grid = await menu.evaluate(session)

        await registry.route(session, next(grid.buttons()).token)

        handler.assert_not_awaited()
        on_disabled.assert_awaited_once()

    @pytest.mark.parametrize('add_button', ['add_link', 'add_web_app'])
    async def test_disabled_link_click_routes_after_reevaluation(self, registry, session, add_button):
        """Заблокированная ссылка рендерится с callback_data, который переживает повторную оценку меню."""
        on_disabled = AsyncMock()
        menu = Menu('main', registry=registry)
        getattr(menu, add_button)(
            'Сайт',
            'https://example.com',
            Requirement(check=lambda ctx: False, disable=True, on_disabled=on_disabled),
        )
        registry.register(menu)

        markup = await menu.markup(session)
        token = markup.inline_keyboard[0][0].callback_data
        await menu.evaluate(session)

        assert token == 'main:0'
        assert await registry.route(session, token) is True
        on_disabled.assert_awaited_once()


def test_separate_registries_do_not_share_menus():
    first, second = MenuRegistry(), MenuRegistry()
    first.register(Menu('main', registry=first))

    assert 'main' in first
    assert 'main' not in second
