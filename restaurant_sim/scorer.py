# restaurant_sim/scorer.py
from .models import SimulationState


def calculate_net_profit(state: SimulationState) -> float:
    """
    Net Profit = Revenue - (Inventory + Labor) - Waste
    Waste is the write-off of the most recent day only.
    """
    net = state.revenue - state.costs.total - state.waste.cost
    return round(net, 2)


def calculate_gross_margin(state: SimulationState) -> float:
    """Share of revenue left after food cost of the units actually sold."""
    food_cost = 0.0
    for record in state.daily_sales:
        for item, sales in record.sales.items():
            menu_item = state.menu_prices.get(item)
            if menu_item:
                food_cost += sales.units_sold * menu_item.cost_to_make
    if state.revenue <= 0:
        return 0.0
    return round((state.revenue - food_cost) / state.revenue, 4)
