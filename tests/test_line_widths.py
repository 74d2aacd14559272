import pytest

from minikin.line_widths import LineWidths, TabStops


def test_first_and_rest_widths():
    widths = LineWidths()
    widths.set_widths(100.0, 2, 80.0)
    assert [widths.get_line_width(i) for i in range(4)] == [100.0, 100.0, 80.0, 80.0]


def test_constant_when_widths_equal_and_no_indents():
    widths = LineWidths()
    widths.set_widths(50.0, 1, 50.0)
    assert widths.is_constant()


def test_not_constant_when_widths_differ():
    widths = LineWidths()
    widths.set_widths(50.0, 1, 40.0)
    assert not widths.is_constant()


def test_indents_make_widths_non_constant_until_cleared():
    widths = LineWidths()
    widths.set_widths(50.0, 1, 50.0)
    widths.set_indents([5.0])
    assert not widths.is_constant()
    widths.clear()
    assert widths.is_constant()
    assert widths.get_line_width(3) == 50.0


def test_indents_are_subtracted_per_line_and_last_repeats():
    widths = LineWidths()
    widths.set_widths(100.0, 1, 80.0)
    indents = [10.0, 20.0]
    widths.set_indents(indents)
    assert widths.get_line_width(0) + indents[0] == 100.0
    assert widths.get_line_width(1) + indents[1] == 80.0
    assert widths.get_line_width(5) + indents[-1] == 80.0


def test_tab_uses_explicit_stops_first():
    tabs = TabStops()
    tabs.set([10, 30], 8)
    assert tabs.next_tab(5.0) == 10.0
    assert tabs.next_tab(10.0) == 30.0


@pytest.mark.parametrize("width", [0.0, 3.5, 8.0, 30.0, 41.2])
def test_tab_falls_back_to_regular_width(width):
    tabs = TabStops()
    tabs.set([10, 30], 8)
    result = tabs.next_tab(max(width, 30.0))
    base = max(width, 30.0)
    assert result % 8 == 0
    assert base < result <= base + 8


def test_tab_without_stops():
    tabs = TabStops()
    tabs.set(None, 4)
    result = tabs.next_tab(6.0)
    assert result % 4 == 0
    assert 6.0 < result <= 10.0


def test_tab_without_width_raises():
    tabs = TabStops()
    tabs.set(None, 0)
    with pytest.raises(ValueError):
        tabs.next_tab(1.0)