# restaurant_sim/decisions.py
"""
Decision ingress and application.

Provider payloads are validated into the tagged decision variants before any
state is touched. Each list entry is validated on its own so one malformed
line never discards the rest of a decision.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from .config import SCENARIO_INVENTORY, SCENARIO_PRICING, SCENARIO_STAFFING
from .models import (
    DecisionResult,
    InventoryDecision,
    InventoryItem,
    OrderLine,
    PriceAdjustment,
    PricingDecision,
    ShiftAssignment,
    SimulationState,
    StaffingDecision,
)

logger = logging.getLogger(__name__)

SCENARIO_KINDS = {
    SCENARIO_INVENTORY: 'inventory',
    SCENARIO_STAFFING: 'staffing',
    SCENARIO_PRICING: 'pricing',
}

# scenario -> (decision model, list field, wire name of the list, entry model)
_DECISION_SHAPES = {
    SCENARIO_INVENTORY: (InventoryDecision, 'items_to_order', 'itemsToOrder', OrderLine),
    SCENARIO_STAFFING: (StaffingDecision, 'schedule', 'schedule', ShiftAssignment),
    SCENARIO_PRICING: (PricingDecision, 'price_adjustments', 'priceAdjustments', PriceAdjustment),
}


def _validate_entries(scenario: str, entries: Any, entry_model: Type[BaseModel]) -> list:
    if entries is None:
        return []
    if not isinstance(entries, (list, tuple)):
        logger.warning("Decision entries for '%s' are not a list. Skipping.", scenario)
        return []

    valid = []
    for index, entry in enumerate(entries):
        if isinstance(entry, entry_model):
            valid.append(entry)
            continue
        if not isinstance(entry, Mapping):
            logger.warning("Invalid entry #%d in '%s' decision (%r). Skipping.", index, scenario, entry)
            continue
        try:
            valid.append(entry_model.model_validate(entry))
        except ValidationError as e:
            logger.warning("Malformed entry #%d in '%s' decision skipped: %s",
                           index, scenario, e.errors()[0].get('msg', e))
    return valid


def parse_decision(scenario: str, payload: Any) -> Optional[DecisionResult]:
    """
    Validate a decision for one scenario.

    Accepts a DecisionResult, a bare decision variant, or a raw mapping
    (either the provider envelope or the decision body itself). Returns
    None when nothing usable can be extracted.
    """
    shape = _DECISION_SHAPES.get(scenario)
    if shape is None:
        logger.warning("Unknown decision scenario '%s'. Ignoring.", scenario)
        return None
    model, field, wire_name, entry_model = shape
    expected_kind = SCENARIO_KINDS[scenario]

    if payload is None:
        return None

    if isinstance(payload, DecisionResult):
        if payload.decision is None:
            return None
        if payload.decision.kind != expected_kind:
            logger.warning("Decision of kind '%s' supplied for scenario '%s'. Ignoring.",
                           payload.decision.kind, scenario)
            return None
        return payload

    if isinstance(payload, (InventoryDecision, StaffingDecision, PricingDecision)):
        if payload.kind != expected_kind:
            logger.warning("Decision of kind '%s' supplied for scenario '%s'. Ignoring.",
                           payload.kind, scenario)
            return None
        return DecisionResult(decision=payload)

    if not isinstance(payload, Mapping):
        logger.warning("Decision for '%s' is not an object (%r). Ignoring.", scenario, type(payload).__name__)
        return None

    body = payload.get('decision', payload)
    if not isinstance(body, Mapping):
        logger.warning("Decision body for '%s' is not an object. Ignoring.", scenario)
        return None

    kind = body.get('kind', expected_kind)
    if kind != expected_kind:
        logger.warning("Decision of kind '%s' supplied for scenario '%s'. Ignoring.", kind, scenario)
        return None

    entries = body.get(wire_name, body.get(field))
    fields = {field: _validate_entries(scenario, entries, entry_model)}
    for extra in ('order_timing', 'adjustment_timing'):
        if extra in model.model_fields:
            alias = model.model_fields[extra].alias
            value = body.get(alias, body.get(extra))
            if isinstance(value, str):
                fields[extra] = value
    decision = model(**fields)

    rationale = payload.get('rationale', body.get('rationale', ''))
    impact = payload.get('expectedImpact', body.get('expectedImpact', payload.get('expected_impact', {})))
    source = payload.get('source')
    if source not in ('provider', 'fallback'):
        source = 'manual'
    return DecisionResult(
        decision=decision,
        rationale=rationale if isinstance(rationale, str) else str(rationale),
        expected_impact=impact if isinstance(impact, Mapping) else {},
        source=source,
    )


def normalize_decisions(decisions: Optional[Mapping[str, Any]]) -> Dict[str, DecisionResult]:
    """Validate a map of decisions keyed by scenario; unusable ones are dropped."""
    if not decisions:
        return {}
    if not isinstance(decisions, Mapping):
        logger.warning("Decisions must be keyed by scenario, got %s. Ignoring.", type(decisions).__name__)
        return {}

    normalized = {}
    for scenario, payload in decisions.items():
        result = parse_decision(scenario, payload)
        if result is not None:
            normalized[scenario] = result
    return normalized


def calculate_labor_costs(state: SimulationState) -> float:
    """Sum hourly rate x shift hours over every scheduled staff member."""
    labor = 0.0
    for shifts in state.staff_schedule.values():
        for roster in shifts.values():
            for staff_member in roster:
                cost = state.staff_costs.get(staff_member)
                if cost:
                    labor += cost.hourly_rate * cost.hours_per_shift
    state.costs.labor = labor
    state.costs.total = state.costs.inventory + state.costs.labor
    return labor


def apply_inventory_decision(state: SimulationState, decision: InventoryDecision):
    if not decision.items_to_order:
        return
    for line in decision.items_to_order:
        stock = state.inventory.get(line.item)
        if stock:
            stock.quantity += line.quantity
        else:
            stock = InventoryItem(quantity=line.quantity, unit=line.unit or 'units')
            state.inventory[line.item] = stock
        cost = stock.cost_per_unit * line.quantity
        state.costs.inventory += cost
        logger.info("Ordered %s %s of %s. Cost: $%.2f", line.quantity, line.unit, line.item, cost)
    state.costs.total = state.costs.inventory + state.costs.labor


def apply_staffing_decision(state: SimulationState, decision: StaffingDecision):
    for assignment in decision.schedule:
        shifts = state.staff_schedule.get(assignment.day)
        if shifts is None:
            logger.warning("Day %s not found in staff schedule. Skipping shift update.", assignment.day)
            continue
        shifts[assignment.shift] = list(assignment.staff_assigned)
        logger.info("Rostered %s %s: %s", assignment.day, assignment.shift,
                    ', '.join(assignment.staff_assigned) or 'nobody')
    calculate_labor_costs(state)


def apply_pricing_decision(state: SimulationState, decision: PricingDecision):
    for adjustment in decision.price_adjustments:
        menu_item = state.menu_prices.get(adjustment.item)
        if menu_item is None:
            logger.warning("Price adjustment for unknown menu item %s ignored.", adjustment.item)
            continue
        menu_item.price = adjustment.new_price
        logger.info("Repriced %s to $%.2f", adjustment.item, adjustment.new_price)


_APPLIERS = {
    'inventory': apply_inventory_decision,
    'staffing': apply_staffing_decision,
    'pricing': apply_pricing_decision,
}


def apply_decisions(state: SimulationState, decisions: Optional[Mapping[str, Any]]) -> Dict[str, DecisionResult]:
    """
    Merge a day's decisions into the state.

    Never raises: a failure in one scenario is logged and the remaining
    scenarios are still applied. Returns the decisions that were accepted.
    """
    try:
        normalized = normalize_decisions(decisions)
    except Exception:
        logger.exception("Error validating decisions. Nothing applied.")
        return {}

    for scenario in (SCENARIO_INVENTORY, SCENARIO_STAFFING, SCENARIO_PRICING):
        result = normalized.get(scenario)
        if result is None:
            continue
        try:
            _APPLIERS[result.decision.kind](state, result.decision)
        except Exception:
            logger.exception("Error applying '%s' decision.", scenario)
    return normalized
