# restaurant_sim/generator.py
import copy
import json
import os
from typing import Any, Dict, List

from .config import *

PROFILE_DIR = "data/profiles"

PROFILE_DEFINITIONS = [
    {
        "id": "classic-diner",
        "name": "Classic Diner",
        "description": "Burgers, salads and sodas with a five-person crew",
        "ai_behavior": {
            "priority": "balanced",
            "decision_weights": {"revenue": 0.4, "satisfaction": 0.4, "cost": 0.2},
        },
        "initial_state": {
            "inventory": DEFAULT_INVENTORY,
            "menu_prices": DEFAULT_MENU,
            "staff_schedule": DEFAULT_SCHEDULE,
            "staff_costs": DEFAULT_STAFF_COSTS,
            "customer_satisfaction": INITIAL_SATISFACTION,
            "baseline_sales": DEFAULT_BASELINE_SALES,
            "competitor_prices": DEFAULT_COMPETITOR_PRICES,
        },
    },
    {
        "id": "quick-service",
        "name": "Quick Service",
        "description": "High-volume counter service, thin crew, cheap menu",
        "ai_behavior": {
            "priority": "speed",
            "decision_weights": {"speed": 0.5, "cost": 0.3, "revenue": 0.2},
        },
        "initial_state": {
            "inventory": {
                "Burger Patties": {"quantity": 20, "unit": "kg", "cost_per_unit": 6.0},
                "Fries": {"quantity": 15, "unit": "kg", "cost_per_unit": 1.5},
            },
            "menu_prices": {
                "Burger Combo": {"price": 8.99, "cost_to_make": 3.20, "demand_factor": 1.5},
                "Fries": {"price": 2.99, "cost_to_make": 0.60, "demand_factor": 1.3},
            },
            "staff_schedule": {
                day: {"Lunch": ["Sam", "Lee"], "Dinner": ["Kim", "Ray"]} for day in WEEKDAYS
            },
            "staff_costs": {
                "Sam": {"hourly_rate": 13.0, "hours_per_shift": 5},
                "Lee": {"hourly_rate": 13.5, "hours_per_shift": 5},
                "Kim": {"hourly_rate": 12.5, "hours_per_shift": 5},
                "Ray": {"hourly_rate": 13.0, "hours_per_shift": 5},
            },
            "customer_satisfaction": 0.75,
            "baseline_sales": {
                "Burger Patties": {"sold_last_week": 14, "unit": "kg"},
                "Fries": {"sold_last_week": 18, "unit": "kg"},
            },
            "competitor_prices": {"Burger Combo": 9.49, "Fries": 2.79},
        },
    },
    {
        "id": "fine-dining",
        "name": "Fine Dining",
        "description": "Small menu, premium prices, generous staffing",
        "ai_behavior": {
            "priority": "customer_experience",
            "decision_weights": {"satisfaction": 0.6, "revenue": 0.3, "cost": 0.1},
        },
        "initial_state": {
            "inventory": {
                "Steak": {"quantity": 10, "unit": "kg", "cost_per_unit": 22.0},
                "Wine": {"quantity": 25, "unit": "bottles", "cost_per_unit": 9.0},
            },
            "menu_prices": {
                "Steak Dinner": {"price": 45.00, "cost_to_make": 14.00, "demand_factor": 0.9},
                "Wine Glass": {"price": 12.00, "cost_to_make": 2.50, "demand_factor": 1.1},
            },
            "staff_schedule": {
                day: {"Lunch": ["Ana", "Ben", "Cal"], "Dinner": ["Dee", "Eli", "Fay"]} for day in WEEKDAYS
            },
            "staff_costs": {
                name: {"hourly_rate": rate, "hours_per_shift": 6}
                for name, rate in [("Ana", 21.0), ("Ben", 19.5), ("Cal", 20.0),
                                   ("Dee", 22.0), ("Eli", 19.0), ("Fay", 20.5)]
            },
            "customer_satisfaction": 0.9,
            "baseline_sales": {
                "Steak": {"sold_last_week": 8, "unit": "kg"},
                "Wine": {"sold_last_week": 12, "unit": "bottles"},
            },
            "competitor_prices": {"Steak Dinner": 48.00, "Wine Glass": 13.00},
        },
    },
]

_PROFILES = {p['id']: p for p in PROFILE_DEFINITIONS}


def list_profiles() -> List[str]:
    return [p['id'] for p in PROFILE_DEFINITIONS]


def ensure_dir(directory: str = PROFILE_DIR):
    if not os.path.exists(directory):
        os.makedirs(directory)


def generate_profiles(directory: str = PROFILE_DIR) -> List[str]:
    """Write every profile definition as a JSON file."""
    ensure_dir(directory)
    written = []
    for profile in PROFILE_DEFINITIONS:
        fname = os.path.join(directory, f"{profile['id']}.json")
        with open(fname, 'w') as f:
            json.dump(profile, f, indent=2)
        written.append(fname)
    return written


def load_profile(source: str) -> Dict[str, Any]:
    """
    Load a profile by id or from a JSON file path.
    Raises KeyError for an unknown id.
    """
    if source.endswith('.json') or os.path.sep in source:
        with open(source, 'r') as f:
            return json.load(f)
    return copy.deepcopy(_PROFILES[source])


def initial_state_for(profile: Dict[str, Any], total_days: int = DEFAULT_TOTAL_DAYS) -> Dict[str, Any]:
    """Initial-state configuration for a RestaurantSimulation."""
    state = copy.deepcopy(profile['initial_state'])
    state['total_days'] = total_days
    state['ai_behavior'] = copy.deepcopy(profile.get('ai_behavior', {}))
    return state
