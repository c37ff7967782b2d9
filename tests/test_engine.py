import pytest

from restaurant_sim import engine
from restaurant_sim.baselines import RuleBasedProvider
from restaurant_sim.config import SCENARIO_INVENTORY, SCENARIO_PRICING, SCENARIOS
from restaurant_sim.engine import RestaurantSimulation
from restaurant_sim.models import ConfigurationError

from conftest import RecordingProvider


def test_advance_day_moves_one_day(simulation):
    state = simulation.advance_day()

    assert state.day == 2
    assert len(simulation.get_history()) == 1
    assert simulation.get_history()[0].day == 1
    assert simulation.last_outcome.day == 1
    assert state.daily_sales[-1].day == 1


def test_completed_simulation_is_a_no_op():
    simulation = RestaurantSimulation({'total_days': 2})
    simulation.advance_day()
    simulation.advance_day()
    assert simulation.completed

    before = simulation.get_current_state().model_dump()
    state = simulation.advance_day({SCENARIO_PRICING: {'priceAdjustments': [{'item': 'Soda', 'newPrice': 1.0}]}})

    assert state.day == 3
    assert state.model_dump() == before
    assert len(simulation.get_history()) == 2


def test_failing_day_still_advances(simulation, monkeypatch):
    def explode(state):
        raise RuntimeError("kitchen fire")

    monkeypatch.setattr(engine, 'simulate_daily_operations', explode)
    state = simulation.advance_day()

    assert state.day == 2
    assert simulation.get_history() == []
    assert simulation.last_outcome is None


def test_decisions_apply_before_service(simulation):
    simulation.advance_day({SCENARIO_INVENTORY: {'itemsToOrder': [{'item': 'Chicken', 'quantity': 5, 'unit': 'kg'}]}})

    log = simulation.decision_log
    assert log == [{'day': 1, 'scenario': SCENARIO_INVENTORY, 'source': 'manual',
                    'rationale': '', 'expected_impact': {}}]
    assert simulation.state.costs.inventory == pytest.approx(25.0)
    assert SCENARIO_INVENTORY in simulation.last_decisions


def test_runs_are_deterministic():
    decisions = {
        1: {SCENARIO_PRICING: {'priceAdjustments': [{'item': 'Burger', 'newPrice': 9.99}]}},
        3: {SCENARIO_INVENTORY: {'itemsToOrder': [{'item': 'Lettuce', 'quantity': 10, 'unit': 'kg'}]}},
    }
    first = RestaurantSimulation({'total_days': 10})
    second = RestaurantSimulation({'total_days': 10})
    for day in range(1, 11):
        first.advance_day(decisions.get(day))
        second.advance_day(decisions.get(day))

    assert first.state.model_dump() == second.state.model_dump()
    assert [e.state.model_dump() for e in first.get_history()] == \
           [e.state.model_dump() for e in second.get_history()]


def test_history_is_bounded():
    simulation = RestaurantSimulation({'total_days': 120})
    for _ in range(120):
        simulation.advance_day()

    history = simulation.get_history()
    assert len(history) == 100
    assert history[0].day == 21
    assert history[-1].day == 120


def test_custom_history_capacity():
    simulation = RestaurantSimulation({'total_days': 5}, history_capacity=2)
    for _ in range(5):
        simulation.advance_day()
    assert [e.day for e in simulation.get_history()] == [4, 5]


@pytest.mark.parametrize('config', [
    {'total_days': 0},
    {'day': 0},
    {'day': 10, 'total_days': 3},
    {'customer_satisfaction': 1.5},
    {'inventory': {'Tomatoes': {'quantity': -1, 'unit': 'kg'}}},
    {'menu_prices': {'Burger': {'price': 0}}},
    {'totalDays': 0},
    {'staff_rota': {}},
])
def test_invalid_configuration_is_rejected(config):
    with pytest.raises(ConfigurationError):
        RestaurantSimulation(config)


def test_partial_configuration_keeps_defaults():
    simulation = RestaurantSimulation({'total_days': 3, 'customer_satisfaction': 0.9})

    assert simulation.state.total_days == 3
    assert simulation.state.customer_satisfaction == 0.9
    assert set(simulation.state.menu_prices) == {'Burger', 'Salad', 'Soda'}


def test_decision_inputs_cover_every_scenario(simulation):
    inputs = simulation.build_decision_inputs(1)

    assert set(inputs) == set(SCENARIOS)
    assert inputs[SCENARIO_INVENTORY]['inventory_data']['Tomatoes']['quantity'] == 10
    assert set(inputs['staffing-optimization']['traffic_prediction']) >= {'Monday', 'Sunday'}
    assert inputs[SCENARIO_PRICING]['current_prices']['Burger']['price'] == 10.99
    assert inputs[SCENARIO_PRICING]['max_price_change'] == '10'


@pytest.mark.asyncio
async def test_full_run_with_supplied_decisions():
    simulation = RestaurantSimulation({'total_days': 3})
    decisions = {2: {SCENARIO_PRICING: {'priceAdjustments': [{'item': 'Soda', 'newPrice': 2.5}]}}}

    state = await simulation.run_full_simulation(decisions)

    assert simulation.completed
    assert state.day == 4
    assert len(simulation.get_history()) == 3
    assert simulation.get_history()[1].state.menu_prices['Soda'].price == 2.5


@pytest.mark.asyncio
async def test_full_run_asks_provider_for_every_scenario(recording_provider):
    simulation = RestaurantSimulation({'total_days': 2}, provider=recording_provider)

    await simulation.run_full_simulation(fetch_dynamic=True)

    assert [scenario for scenario, _ in recording_provider.calls] == list(SCENARIOS) * 2
    assert all(isinstance(data, dict) for _, data in recording_provider.calls)


@pytest.mark.asyncio
async def test_supplied_decisions_take_precedence(recording_provider):
    simulation = RestaurantSimulation({'total_days': 2}, provider=recording_provider)
    decisions = {1: {SCENARIO_PRICING: {'priceAdjustments': []}}}

    await simulation.run_full_simulation(decisions, fetch_dynamic=True)

    assert len(recording_provider.calls) == len(SCENARIOS)


@pytest.mark.asyncio
async def test_provider_failure_does_not_stop_the_run():
    simulation = RestaurantSimulation({'total_days': 3})
    provider = RecordingProvider(fail_on_day=2, simulation=simulation)
    simulation.provider = provider
    days_seen = []

    await simulation.run_full_simulation(fetch_dynamic=True, on_day=lambda sim: days_seen.append(sim.state.day))

    assert simulation.completed
    assert days_seen == [2, 3, 4]
    assert len(simulation.get_history()) == 3
    assert len(provider.calls) == 2 * len(SCENARIOS)


@pytest.mark.asyncio
async def test_missing_provider_runs_without_decisions(simulation):
    assert await simulation.fetch_decisions_for_day(1) == {}


@pytest.mark.asyncio
async def test_rule_based_run_orders_before_first_service():
    simulation = RestaurantSimulation({'total_days': 7}, provider=RuleBasedProvider())

    await simulation.run_full_simulation(fetch_dynamic=True)

    first_day = [entry for entry in simulation.decision_log if entry['day'] == 1]
    assert {entry['scenario'] for entry in first_day} == set(SCENARIOS)
    assert all(entry['source'] == 'fallback' for entry in first_day)
    assert simulation.state.costs.inventory > 0
    assert 0.5 <= simulation.state.customer_satisfaction <= 1.0


@pytest.mark.asyncio
async def test_rule_based_runs_are_deterministic():
    first = RestaurantSimulation({'total_days': 14}, provider=RuleBasedProvider())
    second = RestaurantSimulation({'total_days': 14}, provider=RuleBasedProvider())

    await first.run_full_simulation(fetch_dynamic=True)
    await second.run_full_simulation(fetch_dynamic=True)

    assert first.state.model_dump() == second.state.model_dump()


def test_history_cannot_be_rewritten_through_accessors(simulation):
    simulation.advance_day()
    revenue = simulation.get_history()[0].state.revenue

    leaked = simulation.get_history()[0]
    leaked.state.revenue = -1.0
    leaked.state.inventory['Tomatoes'].quantity = -5

    stored = simulation.get_history()[0].state
    assert stored.revenue == revenue
    assert stored.inventory['Tomatoes'].quantity >= 0

    simulation.advance_day()
    assert simulation.last_outcome.revenue_impact == pytest.approx(simulation.last_outcome.day_revenue)


def test_feedback_compares_each_day_with_the_day_before(simulation):
    # Tuesday left without anyone on the roster
    simulation.advance_day({'staffing-optimization': {'schedule': [
        {'day': 'Tuesday', 'shift': 'Lunch', 'staffAssigned': []},
        {'day': 'Tuesday', 'shift': 'Dinner', 'staffAssigned': []},
    ]}})
    assert simulation.last_outcome.satisfaction_change == 0
    assert simulation.get_current_state().advisories == []

    simulation.advance_day()

    history = simulation.get_history()
    outcome = simulation.last_outcome
    assert outcome.day == 2
    assert outcome.revenue_impact == pytest.approx(history[1].state.revenue - history[0].state.revenue)
    assert outcome.satisfaction_change == pytest.approx(
        history[1].state.customer_satisfaction - history[0].state.customer_satisfaction)
    assert outcome.satisfaction_change < -0.03
    messages = [a.message for a in simulation.get_current_state().advisories if a.category == 'staffing']
    assert messages == ['Increase staff for Tuesday to improve customer satisfaction.']
