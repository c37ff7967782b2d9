import pytest

from restaurant_sim.history import HistoryLog


def test_snapshots_are_independent_of_live_state(state):
    history = HistoryLog()
    history.append(state)

    state.inventory['Tomatoes'].quantity = 0
    state.staff_schedule['Monday']['Lunch'].append('Eve')

    snapshot = history.latest().state
    assert snapshot.inventory['Tomatoes'].quantity == 10
    assert snapshot.staff_schedule['Monday']['Lunch'] == ['Alice', 'Bob']


def test_oldest_entries_are_evicted_first(state):
    history = HistoryLog(capacity=3)
    for day in range(1, 6):
        state.day = day
        history.append(state)

    assert len(history) == 3
    assert [entry.day for entry in history.all()] == [3, 4, 5]
    assert history.latest().day == 5


def test_default_capacity_is_one_hundred(state):
    history = HistoryLog()
    for day in range(1, 106):
        state.day = day
        history.append(state)

    assert len(history) == 100
    assert history.all()[0].day == 6


def test_empty_history():
    history = HistoryLog()
    assert history.latest() is None
    assert history.all() == []


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        HistoryLog(capacity=0)


def test_returned_entries_do_not_change_the_log(state):
    history = HistoryLog()
    state.revenue = 86.85
    history.append(state)

    returned = history.all()[0]
    returned.state.revenue = 0.0
    returned.state.inventory['Tomatoes'].quantity = 0
    history.latest().state.menu_prices['Burger'].price = 1.0

    stored = history.latest().state
    assert stored.revenue == 86.85
    assert stored.inventory['Tomatoes'].quantity == 10
    assert stored.menu_prices['Burger'].price == 10.99
