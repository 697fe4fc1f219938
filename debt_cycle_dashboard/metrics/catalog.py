"""Debt cycle metric definitions."""

from debt_cycle_dashboard.config import FRED_SERIES_MAP
from debt_cycle_dashboard.metrics.formulas import get_formula
from debt_cycle_dashboard.models.metrics import MetricDefinition, MetricKind, Transform


CATEGORIES = (
    "deflationary",
    "inflationary",
    "both",
    "financial",
    "consumer",
    "debt-mechanics",
)


def _direct(metric_id: str, title: str, description: str, unit: str, category: str,
            band: tuple[float, float], **kwargs) -> MetricDefinition:
    return MetricDefinition(
        id=metric_id,
        title=title,
        description=description,
        unit=unit,
        category=category,
        kind=MetricKind.DIRECT,
        band=band,
        series_id=FRED_SERIES_MAP[metric_id],
        **kwargs,
    )


def _composite(metric_id: str, title: str, description: str, unit: str,
               formula: str, band: tuple[float, float], **kwargs) -> MetricDefinition:
    get_formula(formula)
    return MetricDefinition(
        id=metric_id,
        title=title,
        description=description,
        unit=unit,
        category="debt-mechanics",
        kind=MetricKind.COMPOSITE,
        band=band,
        formula=formula,
        frequency="quarterly",
        source="Calculated from FRED Data",
        **kwargs,
    )


DEFLATIONARY_METRICS = [
    _direct(
        "debt-to-gdp", "Debt-to-GDP Ratio",
        "The ratio of a country's total debt to its gross domestic product (GDP), "
        "indicating the country's ability to pay back its debt.",
        "%", "deflationary", (30, 140), frequency="quarterly", is_percentage=True,
        trend_status="negative",
        trend_description="The debt-to-GDP ratio is central to debt cycle theory. "
        "High and rising ratios can indicate vulnerability to debt crises.",
    ),
    _direct(
        "short-term-interest", "Short-Term Interest Rates",
        "Interest rates on short-term debt instruments, typically influenced by "
        "central bank policy.",
        "%", "deflationary", (0, 20), frequency="daily", is_percentage=True,
        trend_description="Short rates are the primary tool central banks use to "
        "respond to debt cycles: lowered in deflationary phases, raised in "
        "inflationary ones.",
    ),
    _direct(
        "long-term-interest", "Long-Term Interest Rates",
        "Interest rates on long-term debt instruments, such as 10-year government bonds.",
        "%", "deflationary", (1, 15), is_percentage=True,
    ),
    _direct(
        "unemployment", "Unemployment Rate",
        "The percentage of the labor force that is unemployed but actively seeking "
        "employment.",
        "%", "deflationary", (2, 25), is_percentage=True, trend_status="positive",
        trend_description="Unemployment typically falls during economic expansions "
        "and rises during contractions. Rapid increases often signal the "
        "deflationary phase of a debt cycle.",
    ),
    _direct(
        "stock-market", "Stock Market Indices",
        "Measures of the value of a section of the stock market, typically "
        "represented by the S&P 500 for the U.S.",
        "index", "deflationary", (10, 5000), pattern="up", frequency="daily",
    ),
    _direct(
        "real-estate", "Real Estate Prices",
        "Average prices of residential properties, adjusted for inflation.",
        "index", "deflationary", (50, 250), pattern="up",
        trend_description="Housing prices often rise during the expansion phase of "
        "a debt cycle and fall during the deleveraging phase.",
    ),
    _direct(
        "credit-growth", "Credit Growth Rates",
        "Annual percentage change in total credit to the non-financial sector.",
        "%", "deflationary", (-10, 20), frequency="quarterly", is_percentage=True,
    ),
    _direct(
        "inflation-def", "Inflation Rates",
        "Annual percentage change in price levels, typically measured by the "
        "Consumer Price Index (CPI).",
        "%", "both", (-5, 25), transform=Transform.YOY_PERCENT, is_percentage=True,
        trend_status="warning",
        trend_description="High inflation can signal the inflationary phase, while "
        "deflation often accompanies deflationary debt crises.",
    ),
    # A191RL1Q225SBEA is already a percent change, so no YoY transform
    _direct(
        "gdp-growth-def", "GDP Growth Rates",
        "Annual percentage change in real Gross Domestic Product.",
        "%", "both", (-15, 20), frequency="quarterly", is_percentage=True,
        trend_status="positive",
    ),
    _direct(
        "debt-service-def", "Debt Service Payments",
        "Debt service payments as a percentage of GDP, representing the burden of "
        "debt on the economy.",
        "%", "both", (5, 35), frequency="quarterly", is_percentage=True,
    ),
    _direct(
        "yield-curve", "Treasury Yield Curve",
        "The difference between 10-year and 2-year Treasury bond yields.",
        "%", "financial", (-2, 3), frequency="daily", is_percentage=True,
        trend_status="warning",
        trend_description="An inverted yield curve (negative values) has "
        "historically been a reliable predictor of recessions and deflationary "
        "phases of debt cycles.",
    ),
    _direct(
        "consumer-sentiment", "Consumer Sentiment",
        "Index measuring consumer confidence regarding the economy and personal "
        "finances.",
        "Index", "consumer", (50, 110),
    ),
]

INFLATIONARY_METRICS = [
    _direct(
        "inflation-inf", "Inflation Rates",
        "Annual percentage change in price levels, typically measured by the "
        "Consumer Price Index (CPI).",
        "%", "both", (-5, 25), transform=Transform.YOY_PERCENT, is_percentage=True,
        trend_status="warning",
    ),
    _direct(
        "real-exchange", "Real Exchange Rates",
        "Exchange rates adjusted for inflation differentials between countries.",
        "index", "inflationary", (60, 140),
    ),
    _direct(
        "nominal-exchange", "Nominal Exchange Rates",
        "The current exchange rate between currencies, unadjusted for inflation.",
        "index", "inflationary", (50, 150),
    ),
    _direct(
        "foreign-debt", "Foreign Debt Percentage",
        "Foreign debt as a percentage of GDP, indicating external financial "
        "obligations.",
        "%", "inflationary", (5, 60), frequency="quarterly",
    ),
    _direct(
        "current-account", "Current Account Balance",
        "The balance of trade plus net income plus net current transfers as a "
        "percentage of GDP.",
        "%", "inflationary", (-8, 8), frequency="quarterly",
    ),
    _direct(
        "capital-inflows", "Capital Inflows",
        "Capital inflows as a percentage of GDP, representing foreign investment "
        "in domestic assets.",
        "%", "inflationary", (0, 15), frequency="quarterly",
    ),
    _direct(
        "capital-outflows", "Capital Outflows",
        "Capital outflows as a percentage of GDP, representing domestic investment "
        "in foreign assets.",
        "%", "inflationary", (0, 12), frequency="quarterly",
    ),
    _direct(
        "fx-reserves", "Foreign Exchange Reserves",
        "Foreign exchange reserves, the country's buffer against external shocks.",
        "%", "inflationary", (1, 25),
    ),
    _direct(
        "equity-local", "Equity Prices (Local Currency)",
        "Stock market performance measured in local currency.",
        "index", "inflationary", (10, 5000), pattern="up", frequency="daily",
    ),
    _direct(
        "equity-foreign", "Equity Prices (Foreign Currency)",
        "Stock market performance measured in foreign currency.",
        "index", "inflationary", (10, 4500), pattern="up", frequency="daily",
    ),
    _direct(
        "debt-service-inf", "Debt Service Payments",
        "Debt service payments as a percentage of GDP, representing the burden of "
        "debt on the economy.",
        "%", "both", (5, 35), frequency="quarterly", is_percentage=True,
    ),
    _direct(
        "gdp-growth-inf", "GDP Growth Rates",
        "Annual percentage change in real Gross Domestic Product.",
        "%", "both", (-15, 20), frequency="quarterly", is_percentage=True,
    ),
]

DEBT_MECHANICS_METRICS = [
    _composite(
        "govt-debt-to-revenue", "Government Debt-to-Revenue",
        "Total federal debt as a multiple of annual federal receipts.",
        "x", "debt_to_revenue", (3, 8), pattern="up", trend_status="negative",
        trend_description="How many years of revenue it would take to repay the "
        "debt. A rising ratio means debt is outgrowing the capacity to service it.",
    ),
    _composite(
        "govt-debt-service-to-revenue", "Debt Service-to-Revenue",
        "Federal interest payments as a percentage of federal receipts.",
        "%", "debt_service_to_revenue", (5, 20), is_percentage=True,
        trend_status="warning",
    ),
    _composite(
        "rate-vs-growth", "Interest Rate vs Growth Spread",
        "10-year Treasury yield minus nominal GDP growth (r - g).",
        "%", "rate_vs_growth", (-5, 5), is_percentage=True,
        trend_description="When interest rates exceed nominal growth, debt burdens "
        "rise on their own; when growth exceeds rates, debt can be grown out of.",
    ),
    _composite(
        "debt-to-reserves", "Debt-to-Reserves Ratio",
        "Total federal debt relative to foreign exchange reserves.",
        "x", "debt_to_reserves", (200, 1200), pattern="up",
    ),
]

METRIC_DEFINITIONS: list[MetricDefinition] = [
    *DEFLATIONARY_METRICS,
    *INFLATIONARY_METRICS,
    *DEBT_MECHANICS_METRICS,
]

_BY_ID = {m.id: m for m in METRIC_DEFINITIONS}


def get_definition(metric_id: str) -> MetricDefinition | None:
    return _BY_ID.get(metric_id)


def metrics_by_category(category: str) -> list[MetricDefinition]:
    """Metrics in a category, plus those shared by both cycle types."""
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category {category!r}, expected one of {CATEGORIES}")
    if category == "both":
        return list(METRIC_DEFINITIONS)
    return [m for m in METRIC_DEFINITIONS if m.category in (category, "both")]
