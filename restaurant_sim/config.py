# restaurant_sim/config.py
import os

WEEKDAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']

# Scenario keys used by the decision provider
SCENARIO_INVENTORY = 'inventory-management'
SCENARIO_STAFFING = 'staffing-optimization'
SCENARIO_PRICING = 'dynamic-pricing'
SCENARIOS = [SCENARIO_INVENTORY, SCENARIO_STAFFING, SCENARIO_PRICING]

# Simulation length
DEFAULT_TOTAL_DAYS = 7
HISTORY_CAPACITY = 100

# Traffic
BASE_TRAFFIC = 100
PEAK_DAYS = ('Friday', 'Saturday')
SLOW_DAYS = ('Monday', 'Tuesday')
PEAK_MULTIPLIER = 1.5
SLOW_MULTIPLIER = 0.8
STAFF_FACTOR_BASE = 0.8
STAFF_FACTOR_PER_HEAD = 0.05
STAFF_FACTOR_CAP = 1.2
SATISFACTION_FACTOR_MIN = 0.7
SATISFACTION_FACTOR_MAX = 1.3

# Sales
PRICE_FACTOR_FLOOR = 0.5
PRICE_FACTOR_INTERCEPT = 1.5
PRICE_FACTOR_SCALE = 10.0
UNITS_PER_DEMAND = 10

# Satisfaction
CUSTOMERS_PER_STAFF = 20
UNDERSTAFFED_RATIO = 0.7
OVERSTAFFED_RATIO = 1.3
UNDERSTAFFED_ADJUSTMENT = -0.05
OVERSTAFFED_ADJUSTMENT = 0.02
WELL_STAFFED_ADJUSTMENT = 0.03
STOCKOUT_PENALTY = 0.03
LOW_SALES_RATIO = 0.5
LOW_SALES_PENALTY = 0.02
SATISFACTION_MIN = 0.5
SATISFACTION_MAX = 1.0
INITIAL_SATISFACTION = 0.85

# Waste
OVERSTOCK_THRESHOLD = 30

# Feedback loop
FEEDBACK_SATISFACTION_DROP = -0.05
FEEDBACK_PRICE_MARKUP = 2.0
FEEDBACK_PRICE_FLOOR_MARKUP = 1.5
FEEDBACK_PRICE_STEP = 0.50
FEEDBACK_WASTE_COST = 50.0
FEEDBACK_HIGH_STOCK = 20
FEEDBACK_STAFF_SATISFACTION_DROP = -0.03
FEEDBACK_MIN_STAFF = 4

# Kilograms (or units) of each ingredient consumed per menu item sold
INGREDIENT_USAGE = {
    'Burger': {'Chicken': 0.2, 'Tomatoes': 0.1},
    'Salad': {'Lettuce': 0.2, 'Tomatoes': 0.1},
    'Soda': {},
    'Burger Combo': {'Burger Patties': 0.15, 'Fries': 0.2},
    'Fries': {'Fries': 0.2},
    'Steak Dinner': {'Steak': 0.3},
    'Wine Glass': {'Wine': 0.2},
}

# Default restaurant
DEFAULT_INVENTORY = {
    'Tomatoes': {'quantity': 10, 'unit': 'kg', 'expiry': '2023-12-05', 'cost_per_unit': 2.5},
    'Lettuce': {'quantity': 5, 'unit': 'kg', 'expiry': '2023-12-03', 'cost_per_unit': 1.8},
    'Chicken': {'quantity': 20, 'unit': 'kg', 'expiry': '2023-12-10', 'cost_per_unit': 5.0},
}

DEFAULT_MENU = {
    'Burger': {'price': 10.99, 'cost_to_make': 4.50, 'demand_factor': 1.0},
    'Salad': {'price': 8.99, 'cost_to_make': 3.00, 'demand_factor': 0.8},
    'Soda': {'price': 2.99, 'cost_to_make': 0.50, 'demand_factor': 1.2},
}

DEFAULT_SCHEDULE = {
    'Monday': {'Lunch': ['Alice', 'Bob'], 'Dinner': ['Charlie', 'Dana']},
    'Tuesday': {'Lunch': ['Alice', 'Eve'], 'Dinner': ['Bob', 'Dana']},
    'Wednesday': {'Lunch': ['Charlie', 'Eve'], 'Dinner': ['Alice', 'Bob']},
    'Thursday': {'Lunch': ['Dana', 'Eve'], 'Dinner': ['Alice', 'Charlie']},
    'Friday': {'Lunch': ['Bob', 'Dana'], 'Dinner': ['Alice', 'Eve']},
    'Saturday': {'Lunch': ['Charlie', 'Bob'], 'Dinner': ['Dana', 'Eve']},
    'Sunday': {'Lunch': ['Alice', 'Dana'], 'Dinner': ['Bob', 'Charlie']},
}

DEFAULT_STAFF_COSTS = {
    'Alice': {'hourly_rate': 15.0, 'hours_per_shift': 4},
    'Bob': {'hourly_rate': 14.5, 'hours_per_shift': 4},
    'Charlie': {'hourly_rate': 15.5, 'hours_per_shift': 4},
    'Dana': {'hourly_rate': 14.0, 'hours_per_shift': 4},
    'Eve': {'hourly_rate': 15.0, 'hours_per_shift': 4},
}

# Sales trend handed to the provider before the first day has been sold
DEFAULT_BASELINE_SALES = {
    'Tomatoes': {'sold_last_week': 15, 'unit': 'kg'},
    'Lettuce': {'sold_last_week': 10, 'unit': 'kg'},
    'Chicken': {'sold_last_week': 25, 'unit': 'kg'},
}

DEFAULT_COMPETITOR_PRICES = {
    'Burger': 11.50,
    'Salad': 8.50,
    'Soda': 3.00,
}

# Provider request context
DEMAND_GROWTH = 1.2
DAYS_PER_WEEK = 7
LUNCH_SHARE = 0.4
HIGH_DEMAND_UNITS = 50
MODERATE_DEMAND_UNITS = 20
MAX_HOURS_PER_WEEK = 40
INVENTORY_BUDGET = '$500 for inventory order'
STORAGE_CAPACITY = '100 kg total across all items'
LABOR_BUDGET = '$2000 for the week'
MIN_STAFF_PER_SHIFT = '2'
MAX_PRICE_CHANGE = '10'
MIN_PROFIT_MARGIN = '20'

# Fallback staffing rules
FALLBACK_BASE_STAFF = 4
FALLBACK_MAX_STAFF = 8
FALLBACK_MIN_STAFF = 2
FALLBACK_HIGH_TRAFFIC = 70
FALLBACK_LOW_TRAFFIC = 40
FALLBACK_LUNCH_SHARE = 0.6
FALLBACK_DINNER_SHARE = 0.4

# Decision provider (Gemini)
GEMINI_API_URL = os.getenv('GEMINI_API_URL', 'https://generativelanguage.googleapis.com/v1beta')
GEMINI_API_KEY = os.getenv('GEMINI_API_KEY', '')
GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.0-flash')
GEMINI_MAX_TOKENS = int(os.getenv('GEMINI_MAX_TOKENS', '2048'))
GEMINI_TEMPERATURE = float(os.getenv('GEMINI_TEMPERATURE', '0.7'))
GEMINI_TIMEOUT_SECONDS = float(os.getenv('GEMINI_TIMEOUT_SECONDS', '10'))

# State cache
REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')
CACHE_PREFIX = 'simulation:'
CACHE_TTL_SECONDS = 3600
