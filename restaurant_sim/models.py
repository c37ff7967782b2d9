# restaurant_sim/models.py
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class ConfigurationError(ValueError):
    """Raised when a simulation is built from an invalid initial state."""


class InventoryItem(BaseModel):
    quantity: float = Field(ge=0)
    unit: str = 'units'
    expiry: str = 'N/A'
    cost_per_unit: float = Field(default=0.0, ge=0)


class MenuItem(BaseModel):
    price: float = Field(gt=0)
    cost_to_make: float = Field(default=0.0, ge=0)
    demand_factor: float = Field(default=1.0, gt=0)


class StaffCost(BaseModel):
    hourly_rate: float = Field(ge=0)
    hours_per_shift: float = Field(ge=0)


class Costs(BaseModel):
    inventory: float = 0.0
    labor: float = 0.0
    total: float = 0.0


class ItemSales(BaseModel):
    units_sold: int = 0
    revenue: float = 0.0


class DailySales(BaseModel):
    day: int
    sales: Dict[str, ItemSales]
    traffic: int


class WasteItem(BaseModel):
    item: str
    excess_quantity: float
    unit: str


class WasteRecord(BaseModel):
    items: List[WasteItem] = []
    cost: float = 0.0


class Advisory(BaseModel):
    """Non-binding hint for the next decision request."""
    category: Literal['inventory', 'staffing', 'pricing']
    subject: str
    message: str


class SalesTrend(BaseModel):
    sold_last_week: float
    unit: str = 'units'


class SimulationState(BaseModel):
    model_config = ConfigDict(extra='forbid')

    day: int = Field(default=1, ge=1)
    total_days: int = Field(default=7, ge=1)
    inventory: Dict[str, InventoryItem]
    menu_prices: Dict[str, MenuItem]
    staff_schedule: Dict[str, Dict[str, List[str]]]
    staff_costs: Dict[str, StaffCost]
    daily_sales: List[DailySales] = []
    revenue: float = Field(default=0.0, ge=0)
    costs: Costs = Field(default_factory=Costs)
    customer_satisfaction: float = Field(default=0.85, ge=0.5, le=1.0)
    waste: WasteRecord = Field(default_factory=WasteRecord)
    advisories: List[Advisory] = []
    baseline_sales: Dict[str, SalesTrend] = {}
    competitor_prices: Dict[str, float] = {}
    ai_behavior: Dict[str, Any] = {}

    @property
    def completed(self) -> bool:
        return self.day > self.total_days


class HistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int
    state: SimulationState


class DailyOutcome(BaseModel):
    day: int
    weekday: str
    traffic: int = 0
    day_revenue: float = 0.0
    revenue_impact: float = 0.0
    satisfaction_change: float = 0.0
    waste_cost: float = 0.0
    inventory_shortage: bool = False


# --- Decisions -----------------------------------------------------------
# Wire payloads use camelCase names; both spellings are accepted.

class OrderLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item: str
    quantity: float = Field(ge=0)
    unit: str = 'units'


class ShiftAssignment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: str
    shift: str
    staff_assigned: List[str] = Field(alias='staffAssigned')


class PriceAdjustment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item: str
    new_price: float = Field(alias='newPrice', gt=0)
    current_price: Optional[float] = Field(default=None, alias='currentPrice')


class InventoryDecision(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal['inventory'] = 'inventory'
    items_to_order: List[OrderLine] = Field(default=[], alias='itemsToOrder')
    order_timing: str = Field(default='immediate', alias='orderTiming')


class StaffingDecision(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal['staffing'] = 'staffing'
    schedule: List[ShiftAssignment] = []


class PricingDecision(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal['pricing'] = 'pricing'
    price_adjustments: List[PriceAdjustment] = Field(default=[], alias='priceAdjustments')
    adjustment_timing: str = Field(default='immediate', alias='adjustmentTiming')


Decision = Annotated[
    Union[InventoryDecision, StaffingDecision, PricingDecision],
    Field(discriminator='kind'),
]


class DecisionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    decision: Optional[Decision] = None
    rationale: str = ''
    expected_impact: Dict[str, Any] = Field(default={}, alias='expectedImpact')
    source: Literal['provider', 'fallback', 'manual'] = 'manual'
