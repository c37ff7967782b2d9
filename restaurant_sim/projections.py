# restaurant_sim/projections.py
"""Read-only views of the state used to build decision requests."""
import math
from typing import Any, Dict

from .config import *
from .mechanics import staff_count, traffic_formula
from .models import SimulationState


def _last_sales(state: SimulationState):
    return state.daily_sales[-1].sales if state.daily_sales else None


def sales_trends(state: SimulationState) -> Dict[str, Dict[str, Any]]:
    """Weekly sales estimate per menu item from the most recent day."""
    latest = _last_sales(state)
    if not latest:
        return {item: trend.model_dump() for item, trend in state.baseline_sales.items()}
    return {item: {'sold_last_week': s.units_sold * DAYS_PER_WEEK, 'unit': 'each'}
            for item, s in latest.items()}


def ingredient_trends(state: SimulationState) -> Dict[str, Dict[str, Any]]:
    """Weekly ingredient consumption implied by the most recent day's sales."""
    latest = _last_sales(state)
    if not latest:
        return {item: trend.model_dump() for item, trend in state.baseline_sales.items()}

    usage_totals: Dict[str, float] = {}
    for item, s in latest.items():
        for ingredient, per_unit in INGREDIENT_USAGE.get(item, {}).items():
            usage_totals[ingredient] = usage_totals.get(ingredient, 0.0) + per_unit * s.units_sold * DAYS_PER_WEEK

    trends = {}
    for ingredient, total in usage_totals.items():
        stock = state.inventory.get(ingredient)
        trends[ingredient] = {'sold_last_week': round(total, 3), 'unit': stock.unit if stock else 'units'}
    return trends


def predicted_demand(trends: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {item: {'next_week': math.ceil(trend['sold_last_week'] * DEMAND_GROWTH),
                   'unit': trend.get('unit', 'units')}
            for item, trend in trends.items()}


def seasonal_factors(day: int) -> str:
    if day % 7 in (6, 0):
        return 'Weekend expected, increase in demand by 30%.'
    return 'No significant seasonal factors or events.'


def traffic_prediction(state: SimulationState) -> Dict[str, Dict[str, int]]:
    prediction = {}
    for weekday in WEEKDAYS:
        total = traffic_formula(weekday, staff_count(state, weekday), state.customer_satisfaction)
        lunch = round(total * LUNCH_SHARE)
        prediction[weekday] = {'Lunch': lunch, 'Dinner': total - lunch}
    return prediction


def staff_constraints(state: SimulationState) -> Dict[str, Dict[str, Any]]:
    return {
        staff: {'max_hours': MAX_HOURS_PER_WEEK, 'available': list(WEEKDAYS), 'hourly_rate': cost.hourly_rate}
        for staff, cost in state.staff_costs.items()
    }


def traffic_trends(state: SimulationState) -> Dict[str, Dict[str, Any]]:
    latest = _last_sales(state)
    if not latest:
        return {item: {'demand': 'moderate', 'sold_last_week': 0} for item in state.menu_prices}

    trends = {}
    for item, s in latest.items():
        if s.units_sold > HIGH_DEMAND_UNITS:
            demand = 'high'
        elif s.units_sold > MODERATE_DEMAND_UNITS:
            demand = 'moderate'
        else:
            demand = 'low'
        trends[item] = {'demand': demand, 'sold_last_week': s.units_sold * DAYS_PER_WEEK}
    return trends


def competitor_pricing(state: SimulationState) -> Dict[str, Dict[str, float]]:
    return {item: {'avg_price': price} for item, price in state.competitor_prices.items()}


def ingredient_costs(state: SimulationState) -> Dict[str, Dict[str, float]]:
    summary = {}
    for item, menu_item in state.menu_prices.items():
        ingredient_cost = 0.0
        for ingredient, per_unit in INGREDIENT_USAGE.get(item, {}).items():
            stock = state.inventory.get(ingredient)
            if stock:
                ingredient_cost += per_unit * stock.cost_per_unit
        summary[item] = {
            'ingredient_cost': round(ingredient_cost, 2),
            'cost_to_make': menu_item.cost_to_make,
            'margin': round(menu_item.price - menu_item.cost_to_make, 2),
        }
    return summary
