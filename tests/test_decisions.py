import pytest

from restaurant_sim.baselines import fallback_decision
from restaurant_sim.config import SCENARIO_INVENTORY, SCENARIO_PRICING, SCENARIO_STAFFING
from restaurant_sim.decisions import (
    apply_decisions,
    calculate_labor_costs,
    normalize_decisions,
    parse_decision,
)
from restaurant_sim.engine import RestaurantSimulation
from restaurant_sim.models import DecisionResult, InventoryDecision, OrderLine, PricingDecision


def test_inventory_order_with_malformed_lines(state):
    decisions = {
        SCENARIO_INVENTORY: {
            'decision': {
                'itemsToOrder': [
                    {'item': 'Tomatoes', 'quantity': 5, 'unit': 'kg'},
                    'garbage',
                    {'quantity': 3},
                    {'item': 'Lettuce', 'quantity': -2, 'unit': 'kg'},
                    {'item': 'Basil', 'quantity': 2, 'unit': 'bunch'},
                ],
                'orderTiming': 'immediate',
            },
            'rationale': 'restock',
        }
    }

    applied = apply_decisions(state, decisions)

    assert [line.item for line in applied[SCENARIO_INVENTORY].decision.items_to_order] == ['Tomatoes', 'Basil']
    assert state.inventory['Tomatoes'].quantity == 15
    assert state.inventory['Lettuce'].quantity == 5
    assert state.inventory['Basil'].quantity == 2
    assert state.inventory['Basil'].unit == 'bunch'
    assert state.inventory['Basil'].cost_per_unit == 0
    assert state.costs.inventory == pytest.approx(12.5)
    assert state.costs.total == pytest.approx(12.5 + state.costs.labor)


def test_fallback_order_covers_predicted_demand():
    simulation = RestaurantSimulation()
    inputs = simulation.build_decision_inputs(1)[SCENARIO_INVENTORY]
    assert inputs['predicted_demand']['Tomatoes'] == {'next_week': 18, 'unit': 'kg'}

    result = fallback_decision(SCENARIO_INVENTORY, inputs)
    orders = {line.item: line.quantity for line in result.decision.items_to_order}
    assert orders['Tomatoes'] == 8

    apply_decisions(simulation.state, {SCENARIO_INVENTORY: result})
    assert simulation.state.inventory['Tomatoes'].quantity == 18


def test_staffing_replaces_roster_and_recomputes_labor(make_state):
    state = make_state(
        staff_schedule={'Monday': {'Lunch': ['Alice']}, 'Tuesday': {}},
        staff_costs={'Alice': {'hourly_rate': 15.0, 'hours_per_shift': 4},
                     'Bob': {'hourly_rate': 14.5, 'hours_per_shift': 4}},
    )
    decisions = {
        SCENARIO_STAFFING: {
            'schedule': [
                {'day': 'Monday', 'shift': 'Lunch', 'staffAssigned': ['Alice', 'Bob']},
                {'day': 'Funday', 'shift': 'Lunch', 'staffAssigned': ['Bob']},
                {'day': 'Tuesday'},
            ]
        }
    }

    apply_decisions(state, decisions)

    assert state.staff_schedule['Monday']['Lunch'] == ['Alice', 'Bob']
    assert 'Funday' not in state.staff_schedule
    assert state.staff_schedule['Tuesday'] == {}
    assert state.costs.labor == pytest.approx(118.0)
    assert state.costs.total == pytest.approx(118.0)


def test_unknown_staff_add_no_labor(make_state):
    state = make_state(staff_schedule={'Monday': {'Lunch': ['TBD', 'TBD']}})
    assert calculate_labor_costs(state) == 0


def test_pricing_ignores_unknown_items(state):
    decisions = {
        SCENARIO_PRICING: {
            'priceAdjustments': [
                {'item': 'Burger', 'newPrice': 9.5, 'currentPrice': 10.99},
                {'item': 'Pizza', 'newPrice': 12.0},
                {'item': 'Salad'},
                {'item': 'Soda', 'newPrice': 0},
            ]
        }
    }

    apply_decisions(state, decisions)

    assert state.menu_prices['Burger'].price == 9.5
    assert state.menu_prices['Salad'].price == 8.99
    assert state.menu_prices['Soda'].price == 2.99
    assert 'Pizza' not in state.menu_prices


def test_decision_kind_must_match_scenario(state):
    wrong = InventoryDecision(items_to_order=[OrderLine(item='Tomatoes', quantity=5, unit='kg')])
    applied = apply_decisions(state, {SCENARIO_PRICING: wrong,
                                      SCENARIO_STAFFING: {'decision': {'kind': 'pricing'}}})

    assert applied == {}
    assert state.inventory['Tomatoes'].quantity == 10


def test_unknown_scenarios_and_junk_are_ignored(state):
    before = state.model_dump()

    assert apply_decisions(state, {'marketing-campaign': {'budget': 100}}) == {}
    assert apply_decisions(state, ['not', 'a', 'map']) == {}
    assert apply_decisions(state, {SCENARIO_INVENTORY: 'order stuff'}) == {}
    assert apply_decisions(state, None) == {}
    assert state.model_dump() == before


def test_parse_decision_keeps_envelope_fields():
    result = parse_decision(SCENARIO_PRICING, {
        'decision': {'priceAdjustments': [{'item': 'Soda', 'newPrice': 3.25}], 'adjustmentTiming': 'tomorrow'},
        'rationale': 'Competitors charge more',
        'expectedImpact': {'revenue': 'up'},
        'source': 'provider',
    })

    assert isinstance(result.decision, PricingDecision)
    assert result.decision.adjustment_timing == 'tomorrow'
    assert result.rationale == 'Competitors charge more'
    assert result.expected_impact == {'revenue': 'up'}
    assert result.source == 'provider'


def test_parse_decision_defaults_to_manual_source():
    result = parse_decision(SCENARIO_INVENTORY, {'itemsToOrder': [], 'source': 'somewhere'})
    assert result.source == 'manual'
    assert result.decision.items_to_order == []


def test_normalize_accepts_decision_results():
    result = DecisionResult(decision=PricingDecision(), rationale='no change')
    normalized = normalize_decisions({SCENARIO_PRICING: result, SCENARIO_INVENTORY: None})

    assert normalized == {SCENARIO_PRICING: result}


def test_decision_result_round_trips_wire_names():
    result = DecisionResult.model_validate({
        'decision': {'kind': 'inventory', 'itemsToOrder': [{'item': 'Chicken', 'quantity': 3, 'unit': 'kg'}]},
        'rationale': 'low chicken',
        'expectedImpact': {'cost': 'up'},
    })
    dumped = result.model_dump(by_alias=True)

    assert dumped['decision']['itemsToOrder'][0]['item'] == 'Chicken'
    assert dumped['expectedImpact'] == {'cost': 'up'}


def test_empty_roster_change_still_recomputes_labor(make_state):
    state = make_state(
        staff_schedule={'Monday': {'Lunch': ['Alice'], 'Dinner': ['Bob']}},
        staff_costs={'Alice': {'hourly_rate': 15.0, 'hours_per_shift': 4},
                     'Bob': {'hourly_rate': 14.5, 'hours_per_shift': 4}},
    )
    assert state.costs.labor == 0

    apply_decisions(state, {SCENARIO_STAFFING: {'schedule': []}})

    assert state.costs.labor == pytest.approx(118.0)
    assert state.costs.total == pytest.approx(118.0)
