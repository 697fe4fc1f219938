"""Settings and the FRED series catalog."""

from debt_cycle_dashboard.config.settings import Settings
from debt_cycle_dashboard.config.series import (
    FRED_SERIES_INFO,
    FRED_SERIES_MAP,
    SeriesInfo,
    series_info,
)

__all__ = ["Settings", "FRED_SERIES_INFO", "FRED_SERIES_MAP", "SeriesInfo", "series_info"]
