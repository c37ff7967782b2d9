# restaurant_sim/diagnostics.py
from typing import Any, Dict, List, Mapping, Optional
import numpy as np

from .mechanics import staff_count
from .models import DailyOutcome, DecisionResult, SimulationState
from .scorer import calculate_gross_margin, calculate_net_profit


class Diagnostics:
    def __init__(self, profile_id: str):
        self.profile_id = profile_id

        # Tracking Data
        self.history: List[Dict[str, Any]] = []
        self.final_state: Optional[SimulationState] = None

        # Metrics
        self.inventory_orders = 0
        self.roster_changes = 0
        self.price_changes = 0
        self.fallback_decisions = 0
        self.stockout_days = 0

    def record_step(self, state: SimulationState, outcome: Optional[DailyOutcome],
                    decisions: Optional[Mapping[str, DecisionResult]] = None):
        """Record one simulated day (state is read after the day has advanced)."""
        if outcome is None:
            return
        self.history.append({
            'day': outcome.day,
            'weekday': outcome.weekday,
            'traffic': outcome.traffic,
            'revenue': outcome.day_revenue,
            'satisfaction': state.customer_satisfaction,
            'waste_cost': outcome.waste_cost,
            'staff': staff_count(state, outcome.weekday),
        })
        self.final_state = state
        if outcome.inventory_shortage:
            self.stockout_days += 1

        for result in (decisions or {}).values():
            if not isinstance(result, DecisionResult) or result.decision is None:
                continue
            if result.source == 'fallback':
                self.fallback_decisions += 1
            decision = result.decision
            if decision.kind == 'inventory':
                self.inventory_orders += len(decision.items_to_order)
            elif decision.kind == 'staffing':
                self.roster_changes += len(decision.schedule)
            elif decision.kind == 'pricing':
                self.price_changes += len(decision.price_adjustments)

    def classify_strategy(self) -> str:
        """Label the run by its dominant operating pattern."""
        if not self.history:
            return "Unknown"

        days = len(self.history)
        avg_staff = np.mean([d['staff'] for d in self.history])
        waste_days = sum(1 for d in self.history if d['waste_cost'] > 0)

        if avg_staff < 4:
            return "Lean Staffing"
        elif waste_days > days * 0.5:
            return "Overstocked"
        elif self.price_changes > days:
            return "Discounting"
        else:
            return "Balanced"

    def generate_report(self) -> Dict[str, Any]:
        traffic = [d['traffic'] for d in self.history]
        satisfaction = [d['satisfaction'] for d in self.history]
        state = self.final_state
        return {
            'profile_id': self.profile_id,
            'strategy': self.classify_strategy(),
            'days_simulated': len(self.history),
            'total_revenue': round(state.revenue, 2) if state else 0.0,
            'net_profit': calculate_net_profit(state) if state else 0.0,
            'gross_margin': calculate_gross_margin(state) if state else 0.0,
            'final_satisfaction': satisfaction[-1] if satisfaction else 0.0,
            'mean_satisfaction': round(float(np.mean(satisfaction)), 4) if satisfaction else 0.0,
            'mean_traffic': round(float(np.mean(traffic)), 1) if traffic else 0.0,
            'peak_traffic': int(np.max(traffic)) if traffic else 0,
            'total_waste_cost': round(float(np.sum([d['waste_cost'] for d in self.history])), 2),
            'stockout_days': self.stockout_days,
            'metrics': {
                'inventory_orders': self.inventory_orders,
                'roster_changes': self.roster_changes,
                'price_changes': self.price_changes,
                'fallback_decisions': self.fallback_decisions,
            },
        }
