# restaurant_sim/feedback.py
"""
Outcome evaluation and the advisory side channel.

Advisories are hints for the next decision request; nothing here forces a
future decision. The one direct adjustment is the price correction after a
bad day, which trims over-marked-up items toward their cost floor.
"""
import logging
from typing import Optional

from .config import *
from .mechanics import staff_count, weekday_for_day
from .models import Advisory, DailyOutcome, HistoryEntry, SimulationState

logger = logging.getLogger(__name__)

REDUCE_ORDER_NOTE = 'Reduce order quantity to avoid waste.'
INCREASE_ORDER_NOTE = 'Increase order quantity to prevent stockouts.'


def add_advisory(state: SimulationState, category: str, subject: str, message: str, replace: bool = False):
    """
    Attach a hint to the state. With replace=True an older hint for the same
    category and subject is dropped first; identical hints are never stored twice.
    """
    if replace:
        state.advisories = [a for a in state.advisories
                            if not (a.category == category and a.subject == subject)]
    advisory = Advisory(category=category, subject=subject, message=message)
    if advisory not in state.advisories:
        state.advisories.append(advisory)


def advisories_for(state: SimulationState, category: str) -> list:
    return [a.model_dump() for a in state.advisories if a.category == category]


def measure_outcome(state: SimulationState, previous: Optional[HistoryEntry]) -> DailyOutcome:
    """Compare the state just produced with the previous snapshot (or itself)."""
    baseline = previous.state if previous is not None else state
    last_sales = state.daily_sales[-1] if state.daily_sales else None
    return DailyOutcome(
        day=state.day,
        weekday=weekday_for_day(state.day),
        traffic=last_sales.traffic if last_sales else 0,
        day_revenue=sum(s.revenue for s in last_sales.sales.values()) if last_sales else 0.0,
        revenue_impact=state.revenue - baseline.revenue,
        satisfaction_change=state.customer_satisfaction - baseline.customer_satisfaction,
        waste_cost=state.waste.cost,
        inventory_shortage=any(stock.quantity <= 0 for stock in state.inventory.values()),
    )


def _correct_prices(state: SimulationState):
    for item, menu_item in state.menu_prices.items():
        if menu_item.price > menu_item.cost_to_make * FEEDBACK_PRICE_MARKUP:
            floor = menu_item.cost_to_make * FEEDBACK_PRICE_FLOOR_MARKUP
            new_price = max(floor, menu_item.price - FEEDBACK_PRICE_STEP)
            # prices must stay positive
            if new_price <= 0:
                continue
            menu_item.price = new_price
            add_advisory(state, 'pricing', item,
                         f'Price lowered to ${menu_item.price:.2f} to recover revenue and satisfaction.',
                         replace=True)
            logger.info("Feedback: reduced price of %s to $%.2f", item, menu_item.price)


def evaluate_outcomes(state: SimulationState, previous: Optional[HistoryEntry]) -> DailyOutcome:
    """Measure the day and write the advisories that follow from it."""
    outcome = measure_outcome(state, previous)
    logger.info(
        "Day %d evaluation: revenue impact $%.2f, waste $%.2f, satisfaction change %.1f%%, shortage %s",
        outcome.day, outcome.revenue_impact, outcome.waste_cost,
        outcome.satisfaction_change * 100, 'yes' if outcome.inventory_shortage else 'no',
    )

    if outcome.revenue_impact < 0 or outcome.satisfaction_change < FEEDBACK_SATISFACTION_DROP:
        _correct_prices(state)

    if outcome.waste_cost > FEEDBACK_WASTE_COST:
        for item, stock in state.inventory.items():
            if stock.quantity > FEEDBACK_HIGH_STOCK:
                add_advisory(state, 'inventory', item, REDUCE_ORDER_NOTE, replace=True)
                logger.info("Feedback: reduce orders of %s (holding %s %s)", item, stock.quantity, stock.unit)

    if outcome.inventory_shortage:
        for item, stock in state.inventory.items():
            if stock.quantity <= 0:
                add_advisory(state, 'inventory', item, INCREASE_ORDER_NOTE, replace=True)
                logger.info("Feedback: increase orders of %s after stockout", item)

    if outcome.satisfaction_change < FEEDBACK_STAFF_SATISFACTION_DROP:
        if staff_count(state, outcome.weekday) < FEEDBACK_MIN_STAFF:
            note = f'Increase staff for {outcome.weekday} to improve customer satisfaction.'
            add_advisory(state, 'staffing', outcome.weekday, note)
            logger.info("Feedback: %s", note)

    return outcome
