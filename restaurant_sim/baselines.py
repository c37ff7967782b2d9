# restaurant_sim/baselines.py
"""
Deterministic rule-based decisions.

Used whenever no provider decision is available or valid, and as a
stand-alone provider for offline runs.
"""
import logging
import math
from typing import Any, Dict

from .config import *
from .models import (
    DecisionResult,
    InventoryDecision,
    OrderLine,
    PriceAdjustment,
    PricingDecision,
    ShiftAssignment,
    StaffingDecision,
)

logger = logging.getLogger(__name__)


def _field(data: Any, name: str, default=None):
    if isinstance(data, dict):
        return data.get(name, default)
    return getattr(data, name, default)


def fallback_inventory(input_data: Dict[str, Any]) -> DecisionResult:
    """Order enough to cover the predicted demand shortfall."""
    inventory = input_data.get('inventory_data') or {}
    demand = input_data.get('predicted_demand') or {}

    orders = []
    for item, forecast in demand.items():
        current = inventory.get(item)
        on_hand = _field(current, 'quantity', 0) or 0
        need = _field(forecast, 'next_week', _field(forecast, 'quantity', 0)) or 0
        shortfall = need - on_hand
        if shortfall > 0:
            unit = _field(forecast, 'unit') or _field(current, 'unit') or 'units'
            orders.append(OrderLine(item=item, quantity=math.ceil(shortfall), unit=unit))

    return DecisionResult(
        decision=InventoryDecision(items_to_order=orders, order_timing='immediate' if orders else 'not needed'),
        rationale="Fallback logic: ordered items to cover predicted demand shortfall based on current "
                  "inventory levels. If no shortfall, no order is placed.",
        expected_impact={
            'revenue': 'Positive due to avoiding stockouts' if orders else 'Neutral, no action taken',
            'cost': 'Increased due to inventory purchase' if orders else 'Neutral, no cost incurred',
        },
        source='fallback',
    )


def _roster(count: int) -> list:
    return ['TBD'] * count


def fallback_staffing(input_data: Dict[str, Any]) -> DecisionResult:
    """Scale the roster with predicted traffic, within 2-8 staff a day."""
    prediction = input_data.get('traffic_prediction') or {}
    schedule = []

    if prediction:
        for day, traffic in list(prediction.items())[:7]:
            staff = FALLBACK_BASE_STAFF
            lunch, dinner = _field(traffic, 'Lunch'), _field(traffic, 'Dinner')
            if lunch and dinner:
                average = (lunch + dinner) / 2
                if average > FALLBACK_HIGH_TRAFFIC:
                    staff = min(FALLBACK_BASE_STAFF + 2, FALLBACK_MAX_STAFF)
                elif average < FALLBACK_LOW_TRAFFIC:
                    staff = max(FALLBACK_BASE_STAFF - 1, FALLBACK_MIN_STAFF)
            schedule.append(ShiftAssignment(day=day, shift='Lunch',
                                            staff_assigned=_roster(math.ceil(staff * FALLBACK_LUNCH_SHARE))))
            schedule.append(ShiftAssignment(day=day, shift='Dinner',
                                            staff_assigned=_roster(math.ceil(staff * FALLBACK_DINNER_SHARE))))
    else:
        for i in range(1, 8):
            day = f'Day {i}'
            schedule.append(ShiftAssignment(day=day, shift='Lunch',
                                            staff_assigned=_roster(math.ceil(FALLBACK_BASE_STAFF * FALLBACK_LUNCH_SHARE))))
            schedule.append(ShiftAssignment(day=day, shift='Dinner',
                                            staff_assigned=_roster(math.ceil(FALLBACK_BASE_STAFF * FALLBACK_DINNER_SHARE))))

    adjusted = bool(prediction)
    return DecisionResult(
        decision=StaffingDecision(schedule=schedule),
        rationale="Fallback logic: scheduled staff based on predicted traffic with safety bounds "
                  "(2-8 staff per day). If no data, used default staffing levels.",
        expected_impact={
            'serviceQuality': 'Stable with adjusted staffing for traffic' if adjusted else 'Stable with default staffing',
            'laborCost': 'Adjusted based on traffic predictions' if adjusted else 'Neutral with default staffing',
        },
        source='fallback',
    )


def fallback_pricing(input_data: Dict[str, Any]) -> DecisionResult:
    """Nudge prices with demand: up for high demand, half as much down for low."""
    prices = input_data.get('current_prices') or {}
    trends = input_data.get('traffic_trends') or {}
    try:
        max_change = float(input_data.get('max_price_change') or 10)
    except (TypeError, ValueError):
        max_change = 10.0

    adjustments = []
    for item, trend in trends.items():
        current = prices.get(item)
        price = _field(current, 'price')
        if not price:
            continue
        demand = str(_field(trend, 'demand', ''))
        multiplier = 1.0
        if 'high' in demand:
            multiplier = 1 + max_change / 100
        elif 'low' in demand:
            multiplier = 1 - max_change / 200
        adjustments.append(PriceAdjustment(item=item, current_price=price, new_price=round(price * multiplier, 2)))

    return DecisionResult(
        decision=PricingDecision(price_adjustments=adjustments,
                                 adjustment_timing='immediate' if adjustments else 'not needed'),
        rationale=f"Fallback logic: adjusted prices based on demand trends with a maximum change of "
                  f"{max_change:g}%. High demand increases price, low demand decreases conservatively.",
        expected_impact={
            'revenue': 'Potentially increased with demand-based pricing' if adjustments else 'Neutral, no adjustments made',
            'customerSatisfaction': 'Slightly variable due to price changes' if adjustments else 'Neutral, no changes',
        },
        source='fallback',
    )


_FALLBACKS = {
    SCENARIO_INVENTORY: fallback_inventory,
    SCENARIO_STAFFING: fallback_staffing,
    SCENARIO_PRICING: fallback_pricing,
}


def fallback_decision(scenario: str, input_data: Dict[str, Any] = None) -> DecisionResult:
    input_data = input_data if isinstance(input_data, dict) else {}
    rule = _FALLBACKS.get(scenario)
    if rule is None:
        logger.error("Unsupported scenario '%s'. No fallback decision available.", scenario)
        return DecisionResult(
            decision=None,
            rationale="Fallback logic failed: scenario not recognized. Use 'inventory-management', "
                      "'staffing-optimization' or 'dynamic-pricing'.",
            expected_impact={'revenue': 'Neutral, no action taken', 'cost': 'Neutral, no action taken'},
            source='fallback',
        )
    logger.debug("Using fallback logic for scenario: %s", scenario)
    return rule(input_data)


class RuleBasedProvider:
    """Decision provider that always answers with the fallback rules."""

    name = 'rule-based'

    async def provide(self, scenario: str, input_data: Dict[str, Any]) -> DecisionResult:
        return fallback_decision(scenario, input_data)
