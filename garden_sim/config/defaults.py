"""Global default values and constants.

All numeric constants used throughout the garden_sim package must be defined
here rather than as inline literals. Import from this module wherever a constant
is needed to ensure a single source of truth and full traceability.
"""

# ---------------------------------------------------------------------------
# Simulation defaults
# ---------------------------------------------------------------------------

DEFAULT_ITERATIONS: int = 1000
"""Default number of Monte Carlo iterations per simulation run."""

REFERENCE_GARDEN_AREA_SQ_FT: float = 100.0
"""Garden area the catalog yields and base costs are calibrated for."""

RETURN_HISTOGRAM_BINS: int = 25
"""Number of bins for the net-return and ROI histograms."""

WEATHER_HISTOGRAM_BINS: int = 15
"""Number of bins for the weather-risk histograms."""

PERCENTILE_METHOD: str = "linear"
"""numpy percentile method (Hyndman–Fan type 7 linear interpolation)."""

STD_DDOF: int = 0
"""Delta degrees of freedom for every standard deviation (population estimator)."""

# ---------------------------------------------------------------------------
# Uncertainty coefficients (coefficient of variation per metric)
# ---------------------------------------------------------------------------

HARVEST_CV: float = 0.30
"""Std of total harvest value as a fraction of its mean."""

INVESTMENT_CV: float = 0.10
"""Std of realised investment as a fraction of its mean."""

HEAT_YIELD_CV: float = 0.40
"""Std of heat-specialist yield value as a fraction of its mean."""

COOL_YIELD_CV: float = 0.40
"""Std of cool-season yield value as a fraction of its mean."""

PERENNIAL_YIELD_CV: float = 0.30
"""Std of perennial yield value as a fraction of its mean."""

RAINFALL_CV: float = 0.20
"""Std of annual rainfall as a fraction of the site average."""

# ---------------------------------------------------------------------------
# Sample clamping floors
# ---------------------------------------------------------------------------

MIN_FINANCIAL_VALUE: float = 0.0
"""Floor applied to sampled harvest, investment and yield values."""

MIN_ANNUAL_RAINFALL: float = 10.0
"""Floor applied to sampled annual rainfall (inches)."""

MIN_EVENT_COUNT: int = 0
"""Floor applied to sampled stress-day and freeze-event counts."""

# ---------------------------------------------------------------------------
# Crop catalog
# ---------------------------------------------------------------------------

CATEGORY_HEAT_SPECIALISTS: str = "heatSpecialists"
CATEGORY_COOL_SEASON: str = "coolSeason"
CATEGORY_PERENNIALS: str = "perennials"

AXIS_HEAT: str = "heat"
AXIS_COOL: str = "cool"
AXIS_PERENNIAL: str = "perennial"

BASE_YIELD_MULTIPLIERS: dict[str, float] = {
    CATEGORY_HEAT_SPECIALISTS: 4.0,
    CATEGORY_COOL_SEASON: 3.0,
    CATEGORY_PERENNIALS: 6.0,
}
"""Yield units per allocation percent per 100 sq ft."""

MARKET_PRICES: dict[str, float] = {
    "heat": 1.2,
    "cool": 0.8,
    "herbs": 2.5,
}
"""Market price per yield unit, keyed by produce class."""

# ---------------------------------------------------------------------------
# Climate scenarios
# ---------------------------------------------------------------------------

SUMMER_SCENARIOS: tuple[str, ...] = ("mild", "normal", "extreme", "catastrophic")
WINTER_SCENARIOS: tuple[str, ...] = ("none", "warm", "mild", "traditional")

SUMMER_SEVERITY_MULTIPLIERS: dict[str, float] = {
    "mild": 1.2,
    "normal": 1.0,
    "extreme": 0.7,
    "catastrophic": 0.4,
}
"""Harvest multiplier for the heat axis by summer scenario."""

WINTER_SEVERITY_MULTIPLIERS: dict[str, float] = {
    "traditional": 0.9,
    "mild": 1.0,
    "warm": 1.1,
    "none": 1.2,
}
"""Harvest multiplier contribution by winter scenario."""

BASE_STRESS_DAYS: dict[str, float] = {
    "mild": 5.0,
    "normal": 15.0,
    "extreme": 35.0,
    "catastrophic": 60.0,
}
"""Expected heat-stress days per year at heat intensity 3."""

BASE_FREEZE_EVENTS: dict[str, float] = {
    "traditional": 20.0,
    "mild": 8.0,
    "warm": 3.0,
    "none": 0.0,
}
"""Expected freeze events per year at winter severity 3."""

REFERENCE_INTENSITY_LEVEL: float = 3.0
"""Heat-intensity / winter-severity level the base event rates refer to."""

MIN_INTENSITY_LEVEL: int = 1
MAX_INTENSITY_LEVEL: int = 5

# ---------------------------------------------------------------------------
# Portfolio strategies
# ---------------------------------------------------------------------------

PORTFOLIO_MULTIPLIERS: dict[str, float] = {
    "conservative": 0.85,
    "hedge": 1.0,
    "aggressive": 1.15,
}
"""Investment multiplier per portfolio strategy."""

DEFAULT_PORTFOLIO_STRATEGY: str = "hedge"

MIN_ALLOCATION_PCT: float = 0.0
MAX_ALLOCATION_PCT: float = 100.0

# ---------------------------------------------------------------------------
# Location defaults
# ---------------------------------------------------------------------------

DEFAULT_LOCATION_NAME: str = "Durham, NC"
DEFAULT_HARDINESS_ZONE: str = "7b"
DEFAULT_GARDEN_SIZE_SQ_FT: float = 100.0
DEFAULT_HEAT_INTENSITY: int = 3
DEFAULT_WINTER_SEVERITY: int = 3
DEFAULT_AVG_RAINFALL: float = 46.0
"""Average annual rainfall in inches."""

HARDINESS_ZONE_PATTERN: str = r"^(1[0-3]|[1-9])[ab]?$"
"""USDA hardiness zone string, e.g. ``"7b"`` or ``"11"``."""

REGION_PRESETS: dict[str, dict] = {
    "durham-nc": {"name": "Durham, NC", "hardiness": "7b", "avgRainfall": 46.0},
    "phoenix-az": {"name": "Phoenix, AZ", "hardiness": "9b", "avgRainfall": 8.0},
    "minneapolis-mn": {"name": "Minneapolis, MN", "hardiness": "4b", "avgRainfall": 32.0},
    "seattle-wa": {"name": "Seattle, WA", "hardiness": "9a", "avgRainfall": 38.0},
    "miami-fl": {"name": "Miami, FL", "hardiness": "10b", "avgRainfall": 62.0},
}
"""Location presets keyed by region slug (JSON field names)."""

# ---------------------------------------------------------------------------
# Required investment
# ---------------------------------------------------------------------------

BASE_COSTS: dict[str, float] = {
    "seeds": 80.0,
    "soil": 45.0,
    "fertilizer": 35.0,
    "protection": 25.0,
    "infrastructure": 15.0,
    "tools": 10.0,
    "containers": 12.0,
    "irrigation": 8.0,
}
"""Annual cost per category for a 100 sq ft garden."""

SUMMER_COST_FACTORS: dict[str, dict[str, float]] = {
    "mild": {"heat": 0.9, "protection": 0.8, "irrigation": 0.7},
    "normal": {"heat": 1.0, "protection": 1.0, "irrigation": 1.0},
    "extreme": {"heat": 1.4, "protection": 1.6, "irrigation": 1.8},
    "catastrophic": {"heat": 1.8, "protection": 2.2, "irrigation": 2.5},
}
"""Cost adjustment factors by summer scenario."""

WINTER_PROTECTION_FACTORS: dict[str, float] = {
    "none": 1.0,
    "warm": 1.0,
    "mild": 0.8,
    "traditional": 1.0,
}
"""Protection cost factor by winter scenario."""

PORTFOLIO_COST_FACTORS: dict[str, dict[str, float]] = {
    CATEGORY_HEAT_SPECIALISTS: {"protection": 1.3, "irrigation": 1.4},
    CATEGORY_COOL_SEASON: {"protection": 0.9, "soil": 1.1},
    CATEGORY_PERENNIALS: {"infrastructure": 1.2, "tools": 1.1},
}
"""Cost factors applied proportionally to each category's allocation."""

SUFFICIENCY_ABUNDANT_RATIO: float = 1.2
SUFFICIENCY_ADEQUATE_RATIO: float = 1.0
SUFFICIENCY_MARGINAL_RATIO: float = 0.8
CRITICAL_REDUCE_RATIO: float = 0.6
"""Below this ratio, low-importance categories are flagged for reduction."""

COST_PRIORITIES: tuple[tuple[str, str, str], ...] = (
    ("seeds", "critical", "Essential for any harvest"),
    ("soil", "critical", "Foundation of plant health"),
    ("protection", "high", "Weather and pest protection"),
    ("fertilizer", "high", "Sustained plant nutrition"),
    ("irrigation", "medium", "Water delivery systems"),
    ("infrastructure", "medium", "Support structures"),
    ("containers", "low", "Additional growing space"),
    ("tools", "low", "Garden maintenance equipment"),
)
"""(category, importance, description) in funding priority order."""

# ---------------------------------------------------------------------------
# Output defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_DIR: str = "output"
"""Default root directory for simulation result files."""

CSV_DELIMITER: str = ","
"""Delimiter used in all output CSV files."""

FLOAT_PRECISION: int = 4
"""Number of decimal places for floating-point values in output CSVs."""

CURRENCY_PRECISION: int = 2
"""Number of decimal places for monetary values in output CSVs."""
