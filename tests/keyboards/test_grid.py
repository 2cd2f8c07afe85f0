"""Тесты раскладки кнопок по строкам."""

import pytest

from menugrid.keyboards.button import Button, Requirement
from menugrid.keyboards.grid import ButtonGrid


HIDE = Requirement(check=lambda ctx: False, hide=True)


def _grid(*rows: list[Button]) -> ButtonGrid:
    grid = ButtonGrid()
    for row in rows:
        for button in row:
            grid.append(button)
        grid.new_row()
    return grid


class TestButtonGridLayout:
    def test_new_row_on_empty_row_is_noop(self):
        grid = ButtonGrid()
        grid.new_row()
        grid.new_row()

        assert grid.rows == [[]]
        assert grid.is_empty

    def test_append_goes_to_last_row(self):
        a, b, c = Button.action('A'), Button.action('B'), Button.action('C')
        grid = ButtonGrid()
        grid.append(a)
        grid.append(b)
        grid.new_row()
        grid.append(c)

        assert grid.rows == [[a, b], [c]]
        assert len(grid) == 3

    def test_only_buttons_can_be_added(self):
        with pytest.raises(TypeError):
            ButtonGrid().append({'text': 'A'})

    def test_find_returns_first_match_in_row_major_order(self):
        first = Button.action('A', token='same')
        second = Button.action('B', token='same')
        grid = _grid([Button.link('L', 'https://example.com')], [first, second])

        assert grid.find('same') is first
        assert grid.find('missing') is None


class TestButtonGridSerialization:
    async def test_hidden_rows_disappear_and_order_is_kept(self, keyboard_texts):
        grid = _grid(
            [Button.action('A1'), Button.action('A2', requirement=HIDE)],
            [Button.action('B1', requirement=HIDE), Button.action('B2', requirement=HIDE)],
            [Button.action('C1', requirement=HIDE), Button.action('C2'), Button.action('C3')],
        )

        await grid.evaluate_all(None)

        assert keyboard_texts(grid.to_markup(None)) == [['A1'], ['C2', 'C3']]

    async def test_trailing_empty_row_is_dropped(self):
        grid = _grid([Button.action('A')])

        assert grid.rows[-1] == []
        assert len(grid.to_rows(None)) == 1

    async def test_placeholders_are_never_serialized(self):
        grid = _grid([Button.placeholder('dynamic_0')], [Button.action('A')])

        await grid.evaluate_all(None)

        assert [[button.text for button in row] for row in grid.to_rows(None)] == [['A']]
