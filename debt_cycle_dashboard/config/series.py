"""FRED series catalog: what we fetch and how to describe it."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SeriesInfo:
    """Descriptive metadata for one FRED series."""

    name: str
    description: str
    unit: str
    frequency: str


# Internal keys -> FRED series IDs
FRED_SERIES_MAP: dict[str, str] = {
    "debt-to-gdp": "GFDEGDQ188S",
    "short-term-interest": "DFF",
    "long-term-interest": "GS10",
    "unemployment": "UNRATE",
    "stock-market": "SP500",
    "inflation-def": "CPIAUCSL",
    "gdp-growth-def": "A191RL1Q225SBEA",
    "real-estate": "CSUSHPINSA",
    "credit-growth": "TOTDTEUSQ163N",
    "debt-service-def": "TDSP",
    "inflation-inf": "CPIAUCSL",
    "real-exchange": "RBUSBIS",
    "nominal-exchange": "NBUSBIS",
    "foreign-debt": "FDHBFIN",
    "current-account": "BOPBCA",
    # NETFI stands in for both directions of capital flow
    "capital-inflows": "NETFI",
    "capital-outflows": "NETFI",
    "fx-reserves": "TOTRESNS",
    "equity-local": "SP500",
    "equity-foreign": "SP500",
    "debt-service-inf": "TDSP",
    "gdp-growth-inf": "A191RL1Q225SBEA",
    "yield-curve": "T10Y2Y",
    "consumer-sentiment": "UMCSENT",
    # Raw inputs for the debt mechanics composites
    "federal-debt-raw": "GFDEBTN",
    "federal-receipts-raw": "FGRECPT",
    "interest-payments-raw": "A091RC1Q027SBEA",
    "nominal-gdp-raw": "GDP",
    "nominal-gdp-growth-raw": "A191RP1Q027SBEA",
    "fx-reserves-raw": "TOTRESNS",
}


FRED_SERIES_INFO: dict[str, SeriesInfo] = {
    "GFDEGDQ188S": SeriesInfo(
        "Federal Debt to GDP",
        "Federal Debt: Total Public Debt as Percent of Gross Domestic Product",
        "%",
        "Quarterly",
    ),
    "DFF": SeriesInfo(
        "Federal Funds Rate", "Effective Federal Funds Rate", "%", "Daily"
    ),
    "GS10": SeriesInfo(
        "10-Year Treasury Rate",
        "10-Year Treasury Constant Maturity Rate",
        "%",
        "Monthly",
    ),
    "UNRATE": SeriesInfo(
        "Unemployment Rate", "Civilian Unemployment Rate", "%", "Monthly"
    ),
    "SP500": SeriesInfo("S&P 500", "S&P 500 Stock Market Index", "Index", "Daily"),
    "CPIAUCSL": SeriesInfo(
        "Consumer Price Index",
        "Consumer Price Index for All Urban Consumers: All Items",
        "Index",
        "Monthly",
    ),
    "A191RL1Q225SBEA": SeriesInfo(
        "Real GDP Growth Rate",
        "Percent Change in Real Gross Domestic Product",
        "%",
        "Quarterly",
    ),
    "CSUSHPINSA": SeriesInfo(
        "Case-Shiller Home Price Index",
        "S&P/Case-Shiller U.S. National Home Price Index",
        "Index",
        "Monthly",
    ),
    "TOTDTEUSQ163N": SeriesInfo(
        "Total Credit to Non-Financial Sector",
        "Total Credit to Non-Financial Sector, Adjusted for Breaks",
        "%",
        "Quarterly",
    ),
    "TDSP": SeriesInfo(
        "Debt Service Ratio",
        "Household Debt Service Payments as a Percent of Disposable Personal Income",
        "%",
        "Quarterly",
    ),
    "RBUSBIS": SeriesInfo(
        "Real Effective Exchange Rate",
        "Real Effective Exchange Rate for United States",
        "Index",
        "Monthly",
    ),
    "NBUSBIS": SeriesInfo(
        "Nominal Effective Exchange Rate",
        "Nominal Effective Exchange Rate for United States",
        "Index",
        "Monthly",
    ),
    "FDHBFIN": SeriesInfo(
        "Foreign Holdings of Federal Debt",
        "Federal Debt Held by Foreign and International Investors",
        "Billions of Dollars",
        "Quarterly",
    ),
    "BOPBCA": SeriesInfo(
        "Current Account Balance",
        "Balance on Current Account",
        "Billions of Dollars",
        "Quarterly",
    ),
    "NETFI": SeriesInfo(
        "Net Foreign Investment",
        "Net Foreign Investment",
        "Billions of Dollars",
        "Quarterly",
    ),
    "TOTRESNS": SeriesInfo(
        "Total Reserves",
        "Total Reserves excluding Gold for United States",
        "Millions of U.S. Dollars",
        "Monthly",
    ),
    "T10Y2Y": SeriesInfo(
        "Treasury Yield Curve",
        "10-Year Treasury Constant Maturity Minus 2-Year Treasury Constant Maturity",
        "%",
        "Daily",
    ),
    "UMCSENT": SeriesInfo(
        "Consumer Sentiment",
        "University of Michigan: Consumer Sentiment",
        "Index",
        "Monthly",
    ),
    "GFDEBTN": SeriesInfo(
        "Total Public Debt",
        "Federal Debt: Total Public Debt",
        "Millions of Dollars",
        "Quarterly",
    ),
    "FGRECPT": SeriesInfo(
        "Federal Receipts",
        "Federal Government Current Receipts",
        "Billions of Dollars",
        "Quarterly",
    ),
    "A091RC1Q027SBEA": SeriesInfo(
        "Federal Interest Payments",
        "Federal government current expenditures: Interest payments",
        "Billions of Dollars",
        "Quarterly",
    ),
    "GDP": SeriesInfo(
        "Nominal GDP", "Gross Domestic Product", "Billions of Dollars", "Quarterly"
    ),
    "A191RP1Q027SBEA": SeriesInfo(
        "Nominal GDP Growth Rate",
        "Gross Domestic Product, Percent Change from Preceding Period",
        "%",
        "Quarterly",
    ),
}


def series_info(series_id: str, frequency: str = "Unknown") -> SeriesInfo:
    """Catalog entry for a series, or a generic placeholder for unknown IDs."""
    info = FRED_SERIES_INFO.get(series_id)
    if info is not None:
        return info
    return SeriesInfo(
        name=series_id,
        description=f"FRED Series {series_id}",
        unit="value",
        frequency=frequency,
    )
