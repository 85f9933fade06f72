"""Market data layer -- market summaries fed into the risk engine."""

from paradex_bot.market_data.analyzer import (
    MarketAnalysis,
    MarketAnalyzer,
    compute_volume_trend,
    snapshot_from_summary,
)

__all__ = [
    "MarketAnalysis",
    "MarketAnalyzer",
    "compute_volume_trend",
    "snapshot_from_summary",
]
