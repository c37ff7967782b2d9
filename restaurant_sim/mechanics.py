# restaurant_sim/mechanics.py
"""
Daily operations model.

Each sub-step owns its failure: when one raises, it logs and falls back to a
neutral result so the rest of the day still runs.
"""
import logging
import math
from typing import Dict, Optional

from .config import *
from .models import DailySales, ItemSales, SimulationState, WasteItem

logger = logging.getLogger(__name__)


def weekday_for_day(day: int) -> str:
    return WEEKDAYS[(day - 1) % 7]


def staff_count(state: SimulationState, weekday: str) -> int:
    """Total staff rostered across every shift of a weekday."""
    shifts = state.staff_schedule.get(weekday, {})
    return sum(len(roster) for roster in shifts.values())


def traffic_formula(weekday: str, staff: int, satisfaction: float) -> int:
    base_traffic = BASE_TRAFFIC
    if weekday in PEAK_DAYS:
        base_traffic *= PEAK_MULTIPLIER
    elif weekday in SLOW_DAYS:
        base_traffic *= SLOW_MULTIPLIER

    staff_factor = min(STAFF_FACTOR_CAP, STAFF_FACTOR_BASE + staff * STAFF_FACTOR_PER_HEAD)
    satisfaction_factor = min(SATISFACTION_FACTOR_MAX, max(SATISFACTION_FACTOR_MIN, satisfaction))
    return math.floor(base_traffic * staff_factor * satisfaction_factor)


def simulate_customer_traffic(state: SimulationState, weekday: str) -> int:
    try:
        return traffic_formula(weekday, staff_count(state, weekday), state.customer_satisfaction)
    except Exception:
        logger.exception("Error simulating customer traffic. Using base traffic.")
        return BASE_TRAFFIC


def simulate_sales(state: SimulationState, traffic: int) -> Dict[str, ItemSales]:
    sales = {}
    try:
        for item, menu_item in state.menu_prices.items():
            # Higher prices push demand down, never below half
            price_factor = max(PRICE_FACTOR_FLOOR, PRICE_FACTOR_INTERCEPT - menu_item.price / PRICE_FACTOR_SCALE)
            demand = menu_item.demand_factor * price_factor * (traffic / 100)
            units_sold = math.floor(demand * UNITS_PER_DEMAND)
            sales[item] = ItemSales(units_sold=units_sold, revenue=units_sold * menu_item.price)
    except Exception:
        logger.exception("Error simulating sales. Recording zero sales.")
        sales = {item: ItemSales() for item in state.menu_prices}
    return sales


def update_inventory(state: SimulationState, sales: Dict[str, ItemSales]):
    try:
        for item, item_sales in sales.items():
            usage = INGREDIENT_USAGE.get(item, {})
            for ingredient, per_unit in usage.items():
                stock = state.inventory.get(ingredient)
                if stock is None:
                    continue
                stock.quantity = max(0.0, stock.quantity - per_unit * item_sales.units_sold)
    except Exception:
        logger.exception("Error updating inventory.")


def update_customer_satisfaction(state: SimulationState, traffic: int,
                                 sales: Dict[str, ItemSales], weekday: Optional[str] = None):
    try:
        weekday = weekday or weekday_for_day(state.day)
        staff = staff_count(state, weekday)
        ideal_staff = max(1, math.ceil(traffic / CUSTOMERS_PER_STAFF))
        staffing_ratio = staff / ideal_staff

        if staffing_ratio < UNDERSTAFFED_RATIO:
            adjustment = UNDERSTAFFED_ADJUSTMENT
        elif staffing_ratio > OVERSTAFFED_RATIO:
            adjustment = OVERSTAFFED_ADJUSTMENT
        else:
            adjustment = WELL_STAFFED_ADJUSTMENT

        stockouts = sum(1 for stock in state.inventory.values() if stock.quantity <= 0)
        adjustment -= STOCKOUT_PENALTY * stockouts

        total_units = sum(s.units_sold for s in sales.values())
        if total_units / (traffic or 1) < LOW_SALES_RATIO:
            adjustment -= LOW_SALES_PENALTY

        state.customer_satisfaction = max(SATISFACTION_MIN,
                                          min(SATISFACTION_MAX, state.customer_satisfaction + adjustment))
    except Exception:
        logger.exception("Error updating customer satisfaction.")


def calculate_revenue(state: SimulationState, sales: Dict[str, ItemSales]) -> float:
    try:
        day_revenue = sum(s.revenue for s in sales.values())
        state.revenue += day_revenue
        return day_revenue
    except Exception:
        logger.exception("Error calculating revenue.")
        return 0.0


def calculate_waste(state: SimulationState):
    """Anything stocked above the overstock threshold is written off."""
    try:
        state.waste.items = []
        state.waste.cost = 0.0
        for item, stock in state.inventory.items():
            if stock.quantity > OVERSTOCK_THRESHOLD:
                excess = stock.quantity - OVERSTOCK_THRESHOLD
                state.waste.items.append(WasteItem(item=item, excess_quantity=excess, unit=stock.unit))
                state.waste.cost += excess * stock.cost_per_unit
                stock.quantity = OVERSTOCK_THRESHOLD
    except Exception:
        logger.exception("Error calculating waste.")


def simulate_daily_operations(state: SimulationState) -> DailySales:
    """Run one day of service for state.day and record it in daily_sales."""
    weekday = weekday_for_day(state.day)
    traffic = simulate_customer_traffic(state, weekday)
    sales = simulate_sales(state, traffic)
    update_inventory(state, sales)
    update_customer_satisfaction(state, traffic, sales, weekday)
    calculate_revenue(state, sales)
    calculate_waste(state)

    record = DailySales(day=state.day, sales=sales, traffic=traffic)
    state.daily_sales.append(record)
    logger.debug("Day %d (%s): %d customers, %d units sold", state.day, weekday, traffic,
                 sum(s.units_sold for s in sales.values()))
    return record
