# restaurant_sim/prompts.py
import json
from typing import Any, Dict

from .config import SCENARIO_INVENTORY, SCENARIO_PRICING, SCENARIO_STAFFING

INVENTORY_PROMPT = """
You are managing a restaurant's inventory. Based on the following data, decide what items to order,
in what quantities, and when, to keep stock healthy without overstocking or running out.

Current Inventory Data:
{inventory_data}

Sales Trends (last 7 days):
{sales_trends}

Predicted Demand (next 7 days):
{predicted_demand}

Seasonal Factors or Upcoming Events:
{seasonal_factors}

Notes from previous days:
{advisories}

Constraints:
- Budget for inventory order: {budget}
- Storage capacity: {storage_capacity}
- Anything held above 30 units of one item is written off as waste at the end of the day.

Respond with JSON only:
{{
  "decision": {{
    "itemsToOrder": [{{"item": "string", "quantity": number, "unit": "string"}}],
    "orderTiming": "string"
  }},
  "rationale": "string",
  "expectedImpact": {{"revenue": "string", "cost": "string"}}
}}
"""

STAFFING_PROMPT = """
You are managing a restaurant's staff schedule. Based on the following data, decide the roster that
covers peak times while keeping labor cost down during slow periods.

Current Staff Schedule:
{current_schedule}

Predicted Customer Traffic (next 7 days):
{traffic_prediction}

Staff Availability and Constraints:
{staff_constraints}

Historical Service Quality Metrics:
{service_metrics}

Notes from previous days:
{advisories}

Constraints:
- Labor budget: {labor_budget}
- Minimum staff required per shift: {min_staff_per_shift}
- Maximum hours per week per person: {max_hours_per_week}

Respond with JSON only:
{{
  "decision": {{
    "schedule": [{{"day": "string", "shift": "string", "staffAssigned": ["string"]}}]
  }},
  "rationale": "string",
  "expectedImpact": {{"serviceQuality": "string", "laborCost": "string"}}
}}
"""

PRICING_PROMPT = """
You are managing a restaurant's menu prices. Based on the following data, decide how to adjust prices
to grow revenue while keeping customers satisfied.

Current Menu Prices:
{current_prices}

Customer Traffic and Demand Trends (last 7 days):
{traffic_trends}

Competitor Pricing Data:
{competitor_pricing}

Ingredient Costs:
{ingredient_costs}

Notes from previous days:
{advisories}

Constraints:
- Price changes should not exceed {max_price_change}%.
- Keep a minimum profit margin of {min_profit_margin}% per item.

Respond with JSON only:
{{
  "decision": {{
    "priceAdjustments": [{{"item": "string", "currentPrice": number, "newPrice": number}}],
    "adjustmentTiming": "string"
  }},
  "rationale": "string",
  "expectedImpact": {{"revenue": "string", "customerSatisfaction": "string"}}
}}
"""


def _dump(value: Any) -> str:
    return json.dumps(value or {}, indent=2, default=str)


def _notes(advisories) -> str:
    if not advisories:
        return 'None'
    return '\n'.join(f"- {a['subject']}: {a['message']}" for a in advisories)


def _text(value: Any) -> str:
    return str(value) if value else 'Not specified'


def build_prompt(scenario: str, input_data: Dict[str, Any]) -> str:
    """Fill the scenario template. Raises KeyError for unsupported scenarios."""
    notes = _notes(input_data.get('advisories'))

    if scenario == SCENARIO_INVENTORY:
        return INVENTORY_PROMPT.format(
            inventory_data=_dump(input_data.get('inventory_data')),
            sales_trends=_dump(input_data.get('sales_trends')),
            predicted_demand=_dump(input_data.get('predicted_demand')),
            seasonal_factors=input_data.get('seasonal_factors') or 'None',
            advisories=notes,
            budget=_text(input_data.get('budget')),
            storage_capacity=_text(input_data.get('storage_capacity')),
        )
    if scenario == SCENARIO_STAFFING:
        return STAFFING_PROMPT.format(
            current_schedule=_dump(input_data.get('current_schedule')),
            traffic_prediction=_dump(input_data.get('traffic_prediction')),
            staff_constraints=_dump(input_data.get('staff_constraints')),
            service_metrics=_dump(input_data.get('service_metrics')),
            advisories=notes,
            labor_budget=_text(input_data.get('labor_budget')),
            min_staff_per_shift=_text(input_data.get('min_staff_per_shift')),
            max_hours_per_week=_text(input_data.get('max_hours_per_week')),
        )
    if scenario == SCENARIO_PRICING:
        return PRICING_PROMPT.format(
            current_prices=_dump(input_data.get('current_prices')),
            traffic_trends=_dump(input_data.get('traffic_trends')),
            competitor_pricing=_dump(input_data.get('competitor_pricing')),
            ingredient_costs=_dump(input_data.get('ingredient_costs')),
            advisories=notes,
            max_price_change=input_data.get('max_price_change') or '10',
            min_profit_margin=input_data.get('min_profit_margin') or '20',
        )
    raise KeyError(scenario)
