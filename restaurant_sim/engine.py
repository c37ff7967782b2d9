# restaurant_sim/engine.py
import copy
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import ValidationError

from .config import *
from .decisions import apply_decisions
from .feedback import advisories_for, evaluate_outcomes
from .history import HistoryLog
from .mechanics import simulate_daily_operations
from .models import ConfigurationError, DailyOutcome, DecisionResult, SimulationState
from . import projections

logger = logging.getLogger(__name__)


def default_initial_state() -> Dict[str, Any]:
    return {
        'day': 1,
        'total_days': DEFAULT_TOTAL_DAYS,
        'inventory': copy.deepcopy(DEFAULT_INVENTORY),
        'menu_prices': copy.deepcopy(DEFAULT_MENU),
        'staff_schedule': copy.deepcopy(DEFAULT_SCHEDULE),
        'staff_costs': copy.deepcopy(DEFAULT_STAFF_COSTS),
        'customer_satisfaction': INITIAL_SATISFACTION,
        'baseline_sales': copy.deepcopy(DEFAULT_BASELINE_SALES),
        'competitor_prices': dict(DEFAULT_COMPETITOR_PRICES),
    }


class RestaurantSimulation:
    """
    Runs the restaurant one day at a time.

    Each day applies the supplied decisions, simulates service, evaluates
    the outcome against the previous day, snapshots the state into history
    and moves the day counter on. One instance owns its state; callers that
    share an instance across tasks must serialize calls to advance_day and
    run_full_simulation themselves.
    """

    def __init__(self, initial_state: Optional[Mapping[str, Any]] = None, provider=None,
                 history_capacity: int = HISTORY_CAPACITY):
        config = default_initial_state()
        if initial_state:
            config.update(initial_state)
        try:
            self.state = SimulationState.model_validate(config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid initial simulation state: {e}") from e
        if self.state.day > self.state.total_days + 1:
            raise ConfigurationError(
                f"Start day {self.state.day} is beyond the end of a {self.state.total_days}-day simulation")

        self.provider = provider
        self.history = HistoryLog(history_capacity)
        self.last_outcome: Optional[DailyOutcome] = None
        self.last_decisions: Dict[str, DecisionResult] = {}
        self.decision_log = []

    @property
    def completed(self) -> bool:
        return self.state.completed

    def get_current_state(self) -> SimulationState:
        return self.state

    def get_history(self):
        return self.history.all()

    def advance_day(self, decisions: Optional[Mapping[str, Any]] = None) -> SimulationState:
        if self.completed:
            logger.info("Simulation completed. Day %d exceeds total days %d.",
                        self.state.day, self.state.total_days)
            return self.state

        day = self.state.day
        logger.info("Advancing simulation to day %d...", day)
        self.last_outcome = None
        self.last_decisions = {}
        try:
            applied = apply_decisions(self.state, decisions)
            self.last_decisions = applied
            self._log_decisions(day, applied)
            simulate_daily_operations(self.state)
            self.last_outcome = evaluate_outcomes(self.state, self.history.latest())
            self.history.append(self.state)
        except Exception:
            # The day counter still moves so a run can never stall on one bad day
            logger.exception("Error advancing simulation on day %d.", day)
        self.state.day = day + 1
        return self.state

    def _log_decisions(self, day: int, applied: Dict[str, DecisionResult]):
        for scenario, result in applied.items():
            self.decision_log.append({
                'day': day,
                'scenario': scenario,
                'source': result.source,
                'rationale': result.rationale,
                'expected_impact': dict(result.expected_impact),
            })

    async def run_full_simulation(self, decisions_per_day: Optional[Mapping[int, Any]] = None,
                                  fetch_dynamic: bool = False,
                                  on_day: Optional[Callable[['RestaurantSimulation'], None]] = None) -> SimulationState:
        """
        Advance until the simulation completes. Days without supplied
        decisions ask the provider when fetch_dynamic is set; a provider
        failure only empties that day's decisions. on_day is called after
        every advanced day.
        """
        decisions_per_day = decisions_per_day or {}
        logger.info("Starting full simulation for %d days...", self.state.total_days)

        while not self.completed:
            day = self.state.day
            decisions = decisions_per_day.get(day) or {}
            if not decisions and fetch_dynamic:
                try:
                    decisions = await self.fetch_decisions_for_day(day)
                except Exception:
                    logger.exception("Failed to fetch decisions for day %d. Continuing without.", day)
                    decisions = {}
            self.advance_day(decisions)
            if on_day is not None:
                on_day(self)

        logger.info("Simulation completed after %d days.", self.state.total_days)
        return self.state

    async def fetch_decisions_for_day(self, day: int) -> Dict[str, DecisionResult]:
        """Ask the provider for every scenario. Raises if the provider does."""
        if self.provider is None:
            logger.warning("No decision provider configured. Day %d runs without decisions.", day)
            return {}

        inputs = self.build_decision_inputs(day)
        decisions = {}
        for scenario in SCENARIOS:
            logger.debug("Requesting '%s' decision for day %d", scenario, day)
            decisions[scenario] = await self.provider.provide(scenario, inputs[scenario])
        return decisions

    def build_decision_inputs(self, day: int) -> Dict[str, Dict[str, Any]]:
        """Assemble the provider input for each scenario from read-only projections."""
        state = self.state
        ingredient_trends = projections.ingredient_trends(state)
        return {
            SCENARIO_INVENTORY: {
                'inventory_data': {item: stock.model_dump() for item, stock in state.inventory.items()},
                'sales_trends': ingredient_trends,
                'predicted_demand': projections.predicted_demand(ingredient_trends),
                'seasonal_factors': projections.seasonal_factors(day),
                'budget': INVENTORY_BUDGET,
                'storage_capacity': STORAGE_CAPACITY,
                'advisories': advisories_for(state, 'inventory'),
                'priorities': dict(state.ai_behavior),
            },
            SCENARIO_STAFFING: {
                'current_schedule': {weekday: {shift: list(roster) for shift, roster in shifts.items()}
                                     for weekday, shifts in state.staff_schedule.items()},
                'traffic_prediction': projections.traffic_prediction(state),
                'staff_constraints': projections.staff_constraints(state),
                'service_metrics': {'LastWeek': {'CustomerSatisfaction': f"{state.customer_satisfaction * 100:.1f}%"}},
                'labor_budget': LABOR_BUDGET,
                'min_staff_per_shift': MIN_STAFF_PER_SHIFT,
                'max_hours_per_week': str(MAX_HOURS_PER_WEEK),
                'advisories': advisories_for(state, 'staffing'),
                'priorities': dict(state.ai_behavior),
            },
            SCENARIO_PRICING: {
                'current_prices': {item: menu_item.model_dump() for item, menu_item in state.menu_prices.items()},
                'traffic_trends': projections.traffic_trends(state),
                'menu_sales_trends': projections.sales_trends(state),
                'competitor_pricing': projections.competitor_pricing(state),
                'ingredient_costs': projections.ingredient_costs(state),
                'max_price_change': MAX_PRICE_CHANGE,
                'min_profit_margin': MIN_PROFIT_MARGIN,
                'advisories': advisories_for(state, 'pricing'),
                'priorities': dict(state.ai_behavior),
            },
        }
